"""
Jenkins API credential: username + API token through Basic Auth.
"""

import base64
from typing import Any, Dict

from src.node_sdk.credentials import BaseCredential
from src.node_sdk.errors import NodeApiError
from src.node_sdk.http import OperationRequest, tolerate_trailing_slash


class JenkinsApiCredential(BaseCredential):
    """Jenkins API credential implementation using an API token through Basic Auth"""

    name = "jenkinsApi"
    display_name = "Jenkins API"
    documentation_url = "https://www.jenkins.io/doc/book/system-administration/authenticating-scripted-clients/"
    properties = [
        {
            "name": "username",
            "displayName": "Jenkins Username",
            "type": "string",
            "required": True,
            "default": "",
        },
        {
            "name": "apiKey",
            "displayName": "Personal API Token",
            "type": "password",
            "required": True,
            "default": "",
            "description": "API token of the user (User > Configure > API Token)",
        },
        {
            "name": "baseUrl",
            "displayName": "Jenkins Instance URL",
            "type": "string",
            "required": True,
            "default": "",
            "placeholder": "https://jenkins.example.com",
        },
    ]

    @property
    def base_url(self) -> str:
        return tolerate_trailing_slash(self.data.get("baseUrl", ""))

    def get_auth_header(self) -> Dict[str, str]:
        """Basic Auth header: base64("username:apiKey")"""
        auth_string = f"{self.data.get('username', '')}:{self.data.get('apiKey', '')}"
        encoded = base64.b64encode(auth_string.encode()).decode()
        return {"Authorization": f"Basic {encoded}"}

    def test(self) -> Dict[str, Any]:
        """
        Test the credential by fetching {baseUrl}/api/xml
        """
        request = OperationRequest(
            method="GET",
            url=f"{self.base_url}/api/xml",
            headers=self.get_auth_header(),
        )
        try:
            self.http_client.send(request)
        except NodeApiError as e:
            return {
                "success": False,
                "message": e.message,
            }
        return {
            "success": True,
            "message": "Authentication successful",
        }
