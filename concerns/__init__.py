"""
Farmer Concerns App

Support tickets raised by farmers and organic farmers, threaded with
messages between the registrant and administrators.
"""
