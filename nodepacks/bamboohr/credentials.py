"""
BambooHR API credential: company subdomain + API key through Basic Auth.
"""

import base64
from typing import Any, Dict

from src.node_sdk.credentials import BaseCredential
from src.node_sdk.errors import NodeApiError

from . import api


class BambooHrApiCredential(BaseCredential):
    """BambooHR API credential implementation using the API key as Basic Auth user"""

    name = "bambooHrApi"
    display_name = "BambooHR API"
    documentation_url = "https://documentation.bamboohr.com/docs/getting-started"
    properties = [
        {
            "name": "subdomain",
            "displayName": "Subdomain",
            "type": "string",
            "required": True,
            "default": "",
            "description": "The part before .bamboohr.com in your company URL",
        },
        {
            "name": "apiKey",
            "displayName": "API Key",
            "type": "password",
            "required": True,
            "default": "",
        },
    ]

    def get_auth_header(self) -> Dict[str, str]:
        """
        BambooHR Basic Auth:
        username = <apiKey>
        password = 'x'
        """
        auth_string = f"{self.data.get('apiKey', '')}:x"
        encoded = base64.b64encode(auth_string.encode()).decode()
        return {
            "Authorization": f"Basic {encoded}",
            "Accept": "application/json",
        }

    def test(self) -> Dict[str, Any]:
        """
        Test the credential by fetching the employee directory
        """
        request = api.employee_directory(self.data.get("subdomain", ""))
        request.headers.update(self.get_auth_header())
        try:
            self.http_client.send(request)
        except NodeApiError as e:
            if e.status_code == 401:
                return {
                    "success": False,
                    "message": "Authentication failed. Check your API key.",
                }
            return {
                "success": False,
                "message": e.message,
            }
        return {
            "success": True,
            "message": "Authentication successful",
        }
