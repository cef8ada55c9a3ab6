"""
Screens

Each screen owns the state one mobile view displays and calls into the
domain services. Errors stop here: every HeyTeamError becomes an error toast
and the screen keeps whatever it was showing before.
"""
