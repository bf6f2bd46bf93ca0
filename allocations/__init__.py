"""
Allocations App

Financial or in-kind assistance granted to registered farmers.
"""
