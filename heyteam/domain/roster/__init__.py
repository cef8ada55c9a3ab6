"""Roster board: a job's invitees grouped by availability status"""
