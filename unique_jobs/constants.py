"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class JobStatus(StrEnum):
    """
    Job lifecycle states as reported by the queue engine.

    The registry never changes a job's state; these values only
    travel with the job objects handed back to callers.
    """

    INACTIVE = "inactive"
    ACTIVE = "active"
    COMPLETE = "complete"
    FAILED = "failed"
    DELAYED = "delayed"


class JobPriority(StrEnum):
    """Job priority levels for queue ordering."""

    LOW = "low"
    NORMAL = "normal"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CleanupPolicy(StrEnum):
    """
    When registry entries are dropped during job removal.

    - ALWAYS: remove the job and clean the registry concurrently.
    - ON_SUCCESS: clean the registry only after the job removal succeeded.
    """

    ALWAYS = "always"
    ON_SUCCESS = "on_success"


class SubmitOutcome(StrEnum):
    """How a submission was satisfied."""

    CREATED = "created"
    EXISTING = "existing"
    PASSTHROUGH = "passthrough"


# Registry document
UNIQUE_JOBS_KEY = "unique:jobs"
UNIQUE_DATA_FIELD = "unique"

# Registry operations (metric labels)
REGISTRY_OP_READ = "read"
REGISTRY_OP_WRITE = "write"
REGISTRY_OP_MERGE = "merge"
REGISTRY_OP_REMOVE = "remove_by_job_id"

# Metrics names
METRIC_JOBS_SUBMITTED = "unique_jobs_submitted_total"
METRIC_JOBS_REMOVED = "unique_jobs_removed_total"
METRIC_REGISTRY_OPERATIONS = "unique_registry_operations_total"
METRIC_REGISTRY_LATENCY = "unique_registry_operation_seconds"
METRIC_REGISTRY_PARSE_FAILURES = "unique_registry_parse_failures_total"

# Trace span names
SPAN_SUBMIT_JOB = "submit_unique_job"
SPAN_REMOVE_JOB = "remove_unique_job"
