"""
TableSnap - Source Package.

This package contains the modules of the TableSnap table extraction
and review system. Each module has a single responsibility.

Modules:
    - input_handler: Upload validation and previews
    - model_inference: Gemini extraction gateway and API client
    - table_state: Table model and edit store
    - grid_view: Headless editable-grid controller
    - output_handler: CSV, clipboard and Excel export
    - session: Review session state machine
    - api: FastAPI application
    - utils: Logging, exceptions, helpers

Architecture:
    Intake → Gateway → Table Store ⇄ Grid View
                            ↓
                         Exporter
"""

__version__ = "1.0.0"
__author__ = "TableSnap Team"

__all__ = [
    'input_handler',
    'model_inference',
    'table_state',
    'grid_view',
    'output_handler',
    'session',
    'api',
    'utils'
]
