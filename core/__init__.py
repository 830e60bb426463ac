"""
Core Layer
- Purpose: Encapsulate the heart of the application's business logic and domain models
- Key Directories:
    - entities
    - interface
    - service
    - usecase
    - exceptions
"""
