"""Permission adapters - Implementations of PermissionGatePort.

Available implementations:
- StaticPermissionGate: Fixed answer (configuration, testing)
- ConsentFilePermissionGate: Prompted consent remembered on disk
"""

from .consent_gate import ConsentFilePermissionGate
from .static_gate import StaticPermissionGate

__all__ = ["ConsentFilePermissionGate", "StaticPermissionGate"]
