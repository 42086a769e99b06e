from .tracker import TrackerService, ValidationFailed
