"""
Infrastructure Layer
- Purpose: Provide concrete implementations of external concerns and integrations
- Key Directories:
    - database
    - repositories
    - di
"""
