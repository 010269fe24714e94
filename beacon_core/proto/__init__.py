"""
Protocol Module: Message schemas and result values.

- Beacon report (name, distance, message fragments)
- Emitter estimate and consolidation/submit results
- Error kinds returned by core operations
"""

from .errors import (
    BeaconError,
    ErrorKind,
)
from .beacon_report import (
    Beacon,
    BeaconName,
    beacon_from_dict,
)
from .emitter_result import (
    EmitterEstimate,
    ConsolidationResult,
    SubmitResult,
    create_failure,
)

__all__ = [
    'BeaconError',
    'ErrorKind',
    'Beacon',
    'BeaconName',
    'beacon_from_dict',
    'EmitterEstimate',
    'ConsolidationResult',
    'SubmitResult',
    'create_failure',
]
