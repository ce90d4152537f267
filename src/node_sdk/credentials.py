"""
Base credential class that all credential types should inherit from.
"""
from typing import Any, ClassVar, Dict, List, Optional

from .http import HttpClient


class BaseCredential:
    """Base class for all credential types"""

    # Class variables to be overridden by subclasses
    name: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    documentation_url: ClassVar[Optional[str]] = None
    properties: ClassVar[List[Dict[str, Any]]] = []

    def __init__(self, data: Dict[str, Any], http_client: Optional[HttpClient] = None):
        """
        Initialize with credential data

        Args:
            data: Dictionary containing decrypted credential values
            http_client: Transport used by test(); a default client if omitted
        """
        self.data = data
        self.http_client = http_client or HttpClient()

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get the credential type definition for database storage"""
        return {
            "name": cls.name,
            "display_name": cls.display_name,
            "documentation_url": cls.documentation_url,
            "properties": cls.properties,
        }

    def test(self) -> Dict[str, Any]:
        """
        Test if the credential is valid

        Returns:
            Dictionary with test results (success, message)
        """
        raise NotImplementedError("Test method not implemented")

    def validate(self) -> Dict[str, Any]:
        """
        Validate that all required properties are provided

        Returns:
            Dictionary with validation results
        """
        missing_fields = []

        for prop in self.properties:
            if prop.get("required", False) and not self.data.get(prop["name"]):
                missing_fields.append(prop["name"])

        if missing_fields:
            return {
                "valid": False,
                "message": f"Missing required fields: {', '.join(missing_fields)}"
            }

        return {"valid": True}
