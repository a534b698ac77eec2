"""
Custom exception classes for the data grid.

Value-shape problems are normalized by the grid and never raised. These
exceptions cover configuration failures and child construction failures,
which the surrounding system is expected to log and treat as fatal.
"""

import logging
from typing import Optional, Dict, Any, List
from pathlib import Path

logger = logging.getLogger(__name__)


class GridError(Exception):
    """
    Base exception for data grid errors.
    
    Attributes:
        message: Error message
        context: Additional context information
        recovery_suggestions: List of suggested recovery actions
    """
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 recovery_suggestions: Optional[List[str]] = None):
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        super().__init__(self.message)
    
    def __str__(self) -> str:
        return self.message
    
    def get_full_details(self) -> Dict[str, Any]:
        """Get complete error details including context and suggestions."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions
        }


class GridConfigError(GridError):
    """
    Exception raised when a grid schema fails validation.
    
    Wraps pydantic validation errors so callers only deal with grid errors.
    """
    
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        
        context = {
            'error_count': len(self.errors),
            'errors': [
                f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
                for error in self.errors
            ]
        }
        
        recovery_suggestions = [
            "Check that every column has a non-empty, unique key",
            "Ensure validate.maxLength is not smaller than validate.minLength",
            "Use one of top, bottom or both for addAnotherPosition"
        ]
        
        super().__init__(message, context, recovery_suggestions)


class ConfigurationLoadError(GridError):
    """
    Exception raised when a configuration or grid schema file cannot be loaded.
    
    This includes YAML/JSON parsing errors, file not found, permission issues, etc.
    """
    
    def __init__(self, config_path: Path, original_error: Exception,
                 message: Optional[str] = None):
        self.config_path = config_path
        self.original_error = original_error
        
        if message is None:
            message = f"Failed to load configuration from {config_path}: {str(original_error)}"
        
        context = {
            'config_path': str(config_path),
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }
        
        recovery_suggestions = [
            "Check that the file exists and is readable",
            "Verify YAML or JSON syntax is correct",
            "Check for file corruption or encoding issues"
        ]
        
        super().__init__(message, context, recovery_suggestions)


class RowConstructionError(GridError):
    """
    Exception raised when the component factory fails while building a row.
    
    Row construction is all-or-nothing: no partially built row is kept.
    """
    
    def __init__(self, row_index: int, column_key: str, original_error: Exception):
        self.row_index = row_index
        self.column_key = column_key
        self.original_error = original_error
        
        message = (
            f"Failed to create component for column '{column_key}' "
            f"in row {row_index}: {str(original_error)}"
        )
        
        context = {
            'row_index': row_index,
            'column_key': column_key,
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }
        
        super().__init__(message, context, ["Check the column schema passed to the component factory"])
