"""
Doorbell system - configuration, loop orchestration and shutdown
"""

from .config import DoorbellConfig, ButtonConfig, IndicatorConfig, MqttConfig
from .edge_handoff import EdgeHandoff
from .shutdown import ShutdownCoordinator, EXIT_FATAL
from .doorbell_manager import DoorbellManager

__all__ = [
    'DoorbellConfig',
    'ButtonConfig',
    'IndicatorConfig',
    'MqttConfig',
    'EdgeHandoff',
    'ShutdownCoordinator',
    'EXIT_FATAL',
    'DoorbellManager',
]
