# Crowdfunding Service Contracts

"""
Crowdfunding Service Contract Module

This module contains:
- data_contract.py: Test data factories and canonical scenarios for the
  crowdfunding ledger
"""
