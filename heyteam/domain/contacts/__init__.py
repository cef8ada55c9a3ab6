"""
Contact side of the roster flow

What a signed-in contact sees: pending invitations to answer and the
schedule of jobs they are on.
"""
