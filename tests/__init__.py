"""
Gestor de Jornadas Test Suite

Test Categories:
- unit: Fast, isolated tests
- integration: Tests that touch the database, HTTP test clients or migrations

Run tests with:
    pytest                          # Run all tests
    pytest -m unit                  # Run only unit tests
    pytest -m integration           # Run only integration tests
"""
