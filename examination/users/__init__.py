"""
Examination Users Package

User profiles, registration and the current-user endpoint.
"""
