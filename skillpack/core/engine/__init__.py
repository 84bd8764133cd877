"""Engine — planning, idempotency checks and task execution."""
