"""
Events App

Farm events announced by administrators and shown to farmers.
"""
