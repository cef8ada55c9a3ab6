"""Departments used to organize jobs and contacts"""
