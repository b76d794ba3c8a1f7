"""
Base credential class that all credential types inherit from.
"""
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional


class BaseCredential(ABC):
    """Base class for all credential types"""

    # Class variables to be overridden by subclasses
    name: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    documentation_url: ClassVar[Optional[str]] = None
    properties: ClassVar[List[Dict[str, Any]]] = []

    def __init__(self, data: Dict[str, Any]):
        """
        Initialize with credential data

        Args:
            data: Dictionary containing credential values
        """
        self.data = data or {}

    @abstractmethod
    def test(self) -> Dict[str, Any]:
        """
        Test if the credential is valid

        Returns:
            Dictionary with test results (success, message)
        """

    def validate(self) -> Dict[str, Any]:
        """
        Validate that all required properties are provided

        Returns:
            Dictionary with validation results
        """
        missing_fields = [
            prop["name"]
            for prop in self.properties
            if prop.get("required", False) and not self.data.get(prop["name"])
        ]

        if missing_fields:
            return {
                "valid": False,
                "message": f"Missing required fields: {', '.join(missing_fields)}"
            }

        return {"valid": True}
