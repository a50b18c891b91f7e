"""
Use cases for the tracker API.

Each service validates request payloads and orchestrates a repository
(JSON document or SQL) to implement the workout and exercise-library rules.
Routers call these services instead of touching storage directly.
"""
