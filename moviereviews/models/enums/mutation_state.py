from enum import Enum


class MutationState(str, Enum):
    IDLE = "idle"
    # waiting for the viewer to confirm a deletion
    CONFIRM_PENDING = "confirm_pending"
    SUBMITTING = "submitting"
    DELETING = "deleting"
    COMMITTED = "committed"
    FAILED = "failed"
