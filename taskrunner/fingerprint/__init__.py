"""Source checkers that decide whether a task's files changed since its last run."""