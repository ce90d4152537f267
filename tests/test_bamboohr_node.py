"""Tests for the BambooHR node and credential against a fake transport."""
import base64

import pytest

from nodepacks.bamboohr import BambooHrApiCredential, BambooHrNode
from nodepacks.bamboohr import api
from src.node_sdk import HttpClient
from src.node_sdk.errors import NodeOperationError


GATEWAY = "https://api.bamboohr.com/api/gateway.php/acme/v1"
BASIC_AUTH = "Basic " + base64.b64encode(b"bamboo-key:x").decode()

FILE_CATEGORIES = {
    "categories": [
        {"id": 12, "name": "Resumes", "files": [{"id": 1, "name": "cv.pdf"}, {"id": 2, "name": "cover.pdf"}]},
        {"id": 13, "name": "Contracts", "files": [{"id": 3, "name": "contract.pdf"}]},
        {"id": 14, "name": "Empty", "files": []},
    ]
}


class TestEmployees:
    """Test employee operations."""

    def test_create_returns_id_from_location(self, run_node, session, make_response, bamboohr_credentials):
        session.request.return_value = make_response(
            201, headers={"Location": f"{GATEWAY}/employees/123"}, reason="Created"
        )

        output = run_node(
            BambooHrNode,
            {
                "resource": "employees",
                "operation": "create",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "additionalFields": {"department": "R&D"},
            },
            credentials=bamboohr_credentials,
        )

        assert output == [[{"json": {"id": "123"}, "pairedItem": {"item": 0}}]]
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{GATEWAY}/employees"
        assert kwargs["json"] == {"firstName": "Ada", "lastName": "Lovelace", "department": "R&D"}
        assert kwargs["headers"]["Authorization"] == BASIC_AUTH
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_get_with_all_fields(self, run_node, session, make_response, bamboohr_credentials):
        session.request.side_effect = [
            make_response(body=[{"id": "1", "name": "First name", "alias": "firstName"}, {"id": "4047"}]),
            make_response(body={"id": "7", "firstName": "Ada", "4047": "x"}),
        ]

        output = run_node(
            BambooHrNode,
            {"resource": "employees", "operation": "get", "employeeId": "7"},
            credentials=bamboohr_credentials,
        )

        meta_call, get_call = session.request.call_args_list
        assert meta_call.kwargs["url"] == f"{GATEWAY}/meta/fields"
        assert get_call.kwargs["url"] == f"{GATEWAY}/employees/7"
        assert get_call.kwargs["params"] == {"fields": "firstName,4047"}
        assert output[0][0]["json"]["firstName"] == "Ada"

    def test_get_with_selected_fields(self, run_node, session, bamboohr_credentials):
        run_node(
            BambooHrNode,
            {"resource": "employees", "operation": "get", "employeeId": "7", "fields": ["firstName", "jobTitle"]},
            credentials=bamboohr_credentials,
        )

        assert session.request.call_count == 1
        assert session.request.call_args.kwargs["params"] == {"fields": "firstName,jobTitle"}

    def test_get_all_respects_limit(self, run_node, session, make_response, bamboohr_credentials):
        directory = {"employees": [{"id": str(n)} for n in range(4)]}
        session.request.return_value = make_response(body=directory)

        output = run_node(
            BambooHrNode,
            {"resource": "employees", "operation": "getAll", "limit": 2},
            credentials=bamboohr_credentials,
        )

        assert session.request.call_args.kwargs["url"] == f"{GATEWAY}/employees/directory"
        assert [item["json"]["id"] for item in output[0]] == ["0", "1"]

    def test_get_all_return_all(self, run_node, session, make_response, bamboohr_credentials):
        session.request.return_value = make_response(body={"employees": [{"id": str(n)} for n in range(8)]})

        output = run_node(
            BambooHrNode,
            {"resource": "employees", "operation": "getAll", "returnAll": True},
            credentials=bamboohr_credentials,
        )

        assert len(output[0]) == 8

    def test_update(self, run_node, session, bamboohr_credentials):
        output = run_node(
            BambooHrNode,
            {"resource": "employees", "operation": "update", "employeeId": "7", "updateFields": {"jobTitle": "CTO"}},
            credentials=bamboohr_credentials,
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{GATEWAY}/employees/7"
        assert kwargs["json"] == {"jobTitle": "CTO"}
        assert output[0][0]["json"] == {"success": True}

    def test_update_without_fields(self, run_node, session, bamboohr_credentials):
        with pytest.raises(NodeOperationError, match="At least one field"):
            run_node(
                BambooHrNode,
                {"resource": "employees", "operation": "update", "employeeId": "7"},
                credentials=bamboohr_credentials,
            )

        session.request.assert_not_called()


class TestFiles:
    """Test employee and company file operations."""

    def test_employee_files_flattened_across_categories(
        self, run_node, session, make_response, bamboohr_credentials
    ):
        session.request.return_value = make_response(body=FILE_CATEGORIES)

        output = run_node(
            BambooHrNode,
            {"resource": "employeeFiles", "operation": "getAll", "employeeId": "7", "returnAll": True},
            credentials=bamboohr_credentials,
        )

        assert session.request.call_args.kwargs["url"] == f"{GATEWAY}/employees/7/files/view"
        assert [item["json"] for item in output[0]] == [
            {"id": 1, "name": "cv.pdf", "categoryId": 12},
            {"id": 2, "name": "cover.pdf", "categoryId": 12},
            {"id": 3, "name": "contract.pdf", "categoryId": 13},
        ]

    def test_company_files_get_all_limit(self, run_node, session, make_response, bamboohr_credentials):
        session.request.return_value = make_response(body=FILE_CATEGORIES)

        output = run_node(
            BambooHrNode,
            {"resource": "companyFiles", "operation": "getAll", "limit": 1},
            credentials=bamboohr_credentials,
        )

        assert session.request.call_args.kwargs["url"] == f"{GATEWAY}/files/view"
        assert len(output[0]) == 1

    def test_company_file_delete(self, run_node, session, bamboohr_credentials):
        output = run_node(
            BambooHrNode,
            {"resource": "companyFiles", "operation": "delete", "fileId": "9"},
            credentials=bamboohr_credentials,
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "DELETE"
        assert kwargs["url"] == f"{GATEWAY}/files/9"
        assert output[0][0]["json"] == {"success": True}

    def test_employee_file_update(self, run_node, session, bamboohr_credentials):
        run_node(
            BambooHrNode,
            {
                "resource": "employeeFiles",
                "operation": "update",
                "employeeId": "7",
                "fileId": "3",
                "updateFields": {"name": "signed.pdf", "shareWithEmployee": False},
            },
            credentials=bamboohr_credentials,
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == f"{GATEWAY}/employees/7/files/3"
        assert kwargs["json"] == {"name": "signed.pdf", "shareWithEmployee": "no"}

    def test_download_produces_binary_item(self, run_node, session, make_response, bamboohr_credentials):
        session.request.return_value = make_response(
            content=b"%PDF-1.4 contract",
            headers={
                "Content-Type": "application/pdf; charset=binary",
                "Content-Disposition": 'attachment; filename="contract.pdf"',
            },
        )

        output = run_node(
            BambooHrNode,
            {"resource": "employeeFiles", "operation": "download", "employeeId": "7", "fileId": "3"},
            credentials=bamboohr_credentials,
            input_data=[{"json": {"source": "trigger"}}],
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == f"{GATEWAY}/employees/7/files/3"
        assert kwargs["headers"]["Accept"] == "*/*"

        [item] = output[0]
        assert item["json"] == {"source": "trigger"}
        binary = item["binary"]["data"]
        assert base64.b64decode(binary["data"]) == b"%PDF-1.4 contract"
        assert binary["mimeType"] == "application/pdf"
        assert binary["fileName"] == "contract.pdf"
        assert binary["fileExtension"] == "pdf"

    def test_upload_from_input_binary(self, run_node, session, bamboohr_credentials):
        entry = {
            "data": base64.b64encode(b"resume").decode(),
            "mimeType": "application/pdf",
            "fileName": "cv.pdf",
        }

        output = run_node(
            BambooHrNode,
            {
                "resource": "employeeFiles",
                "operation": "upload",
                "employeeId": "7",
                "categoryId": "12",
                "options": {"share": False},
            },
            credentials=bamboohr_credentials,
            input_data=[{"json": {}, "binary": {"data": entry}}],
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{GATEWAY}/employees/7/files"
        assert kwargs["files"] == {"file": ("cv.pdf", b"resume", "application/pdf")}
        assert kwargs["data"] == {"fileName": "cv.pdf", "category": "12", "share": "no"}
        assert output[0][0]["json"] == {"success": True}

    def test_upload_missing_binary_property(self, run_node, session, bamboohr_credentials):
        output = run_node(
            BambooHrNode,
            {"resource": "companyFiles", "operation": "upload", "categoryId": "12", "binaryPropertyName": "file"},
            credentials=bamboohr_credentials,
            input_data=[{"json": {}}],
            continue_on_fail=True,
        )

        assert output[0][0]["json"] == {"error": "No binary data property 'file' exists on item!"}
        session.request.assert_not_called()


class TestRequestBuilders:
    """Test BambooHR URL layout."""

    def test_company_and_employee_scopes(self):
        assert api.delete_file("acme", "9").url == f"{GATEWAY}/files/9"
        assert api.delete_file("acme", "9", employee_id="7").url == f"{GATEWAY}/employees/7/files/9"

    def test_get_employee_joins_fields(self):
        request = api.get_employee("acme", "7", ["firstName", "lastName"])
        assert request.params == {"fields": "firstName,lastName"}


class TestBambooHrApiCredential:
    """Test the credential connection test."""

    def test_success(self, session):
        credential = BambooHrApiCredential(
            {"subdomain": "acme", "apiKey": "bamboo-key"},
            http_client=HttpClient(session=session),
        )

        assert credential.test() == {"success": True, "message": "Authentication successful"}
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == f"{GATEWAY}/employees/directory"
        assert kwargs["headers"]["Authorization"] == BASIC_AUTH

    def test_unauthorized(self, session, make_response):
        session.request.return_value = make_response(401, reason="Unauthorized")
        credential = BambooHrApiCredential(
            {"subdomain": "acme", "apiKey": "wrong"},
            http_client=HttpClient(session=session),
        )

        assert credential.test() == {
            "success": False,
            "message": "Authentication failed. Check your API key.",
        }
