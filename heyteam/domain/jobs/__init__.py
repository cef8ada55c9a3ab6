"""Job editing: load a job, validate the edit form, save changes"""
