"""Domain records (workouts, exercise names) and pure validation helpers."""
