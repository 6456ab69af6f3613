"""
Application Layer for the FitStreak API.

This package contains:
- ports/: Abstract repository and messaging interfaces (what the use cases need)
- use_cases/: Program assignment, day progression, reminders and bot updates
- exceptions: Typed errors shared with the infrastructure layer
"""
