"""Workout tracker backend: workouts CRUD plus a shared exercise-name library."""
