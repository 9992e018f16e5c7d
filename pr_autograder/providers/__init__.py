"""Source-control hosts the grader can read from and review on."""
