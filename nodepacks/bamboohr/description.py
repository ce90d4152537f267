"""
BambooHR parameter descriptions, one list per resource.
"""

from typing import Any, Dict, List


def _show(**conditions: Any) -> Dict[str, Any]:
    return {"show": conditions}


EMPLOYEE_FIELD_OPTIONS: List[Dict[str, Any]] = [
    {"displayName": "Address Line 1", "name": "address1", "type": "string", "default": ""},
    {"displayName": "Address Line 2", "name": "address2", "type": "string", "default": ""},
    {"displayName": "City", "name": "city", "type": "string", "default": ""},
    {"displayName": "Country", "name": "country", "type": "string", "default": ""},
    {"displayName": "Date of Birth", "name": "dateOfBirth", "type": "dateTime", "default": ""},
    {"displayName": "Department", "name": "department", "type": "string", "default": ""},
    {"displayName": "Division", "name": "division", "type": "string", "default": ""},
    {"displayName": "Employee Number", "name": "employeeNumber", "type": "string", "default": ""},
    {"displayName": "Gender", "name": "gender", "type": "options", "default": "",
     "options": [{"name": "Female", "value": "female"}, {"name": "Male", "value": "male"}]},
    {"displayName": "Hire Date", "name": "hireDate", "type": "dateTime", "default": ""},
    {"displayName": "Home Email", "name": "homeEmail", "type": "string", "default": ""},
    {"displayName": "Job Title", "name": "jobTitle", "type": "string", "default": ""},
    {"displayName": "Location", "name": "location", "type": "string", "default": ""},
    {"displayName": "Marital Status", "name": "maritalStatus", "type": "options", "default": "",
     "options": [
         {"name": "Single", "value": "Single"},
         {"name": "Married", "value": "Married"},
         {"name": "Domestic Partnership", "value": "Domestic Partnership"},
     ]},
    {"displayName": "Mobile Phone", "name": "mobilePhone", "type": "string", "default": ""},
    {"displayName": "Preferred Name", "name": "preferredName", "type": "string", "default": ""},
    {"displayName": "Work Email", "name": "workEmail", "type": "string", "default": ""},
    {"displayName": "Work Phone", "name": "workPhone", "type": "string", "default": ""},
    {"displayName": "Zip Code", "name": "zipcode", "type": "string", "default": ""},
]


def _return_all(resource: str) -> List[Dict[str, Any]]:
    return [
        {
            "displayName": "Return All",
            "name": "returnAll",
            "type": "boolean",
            "displayOptions": _show(resource=[resource], operation=["getAll"]),
            "default": False,
            "description": "Whether to return all results or only up to a given limit",
        },
        {
            "displayName": "Limit",
            "name": "limit",
            "type": "number",
            "displayOptions": _show(resource=[resource], operation=["getAll"], returnAll=[False]),
            "typeOptions": {"minValue": 1, "maxValue": 1000},
            "default": 5,
            "description": "Max number of results to return",
        },
    ]


EMPLOYEE_DESCRIPTIONS: List[Dict[str, Any]] = [
    {
        "displayName": "Operation",
        "name": "operation",
        "type": "options",
        "displayOptions": _show(resource=["employees"]),
        "options": [
            {"name": "Create", "value": "create", "description": "Create an employee"},
            {"name": "Get", "value": "get", "description": "Get an employee"},
            {"name": "Get All", "value": "getAll", "description": "Get all employees"},
            {"name": "Update", "value": "update", "description": "Update an employee"},
        ],
        "default": "create",
    },
    {
        "displayName": "Synced with Trax Payroll",
        "name": "synced",
        "type": "boolean",
        "displayOptions": _show(resource=["employees"], operation=["create"]),
        "default": False,
        "description": "Whether the employee to create was added to a pay schedule synced with Trax Payroll",
    },
    {
        "displayName": "First Name",
        "name": "firstName",
        "type": "string",
        "displayOptions": _show(resource=["employees"], operation=["create"]),
        "required": True,
        "default": "",
    },
    {
        "displayName": "Last Name",
        "name": "lastName",
        "type": "string",
        "displayOptions": _show(resource=["employees"], operation=["create"]),
        "required": True,
        "default": "",
    },
    {
        "displayName": "Additional Fields",
        "name": "additionalFields",
        "type": "collection",
        "placeholder": "Add Field",
        "displayOptions": _show(resource=["employees"], operation=["create"]),
        "default": {},
        "options": EMPLOYEE_FIELD_OPTIONS,
    },
    {
        "displayName": "Employee ID",
        "name": "employeeId",
        "type": "string",
        "displayOptions": _show(resource=["employees"], operation=["get", "update"]),
        "required": True,
        "default": "",
    },
    {
        "displayName": "Fields",
        "name": "fields",
        "type": "multiOptions",
        "displayOptions": _show(resource=["employees"], operation=["get"]),
        "options": [{"name": "All", "value": "all"}],
        "default": ["all"],
        "description": "Employee fields to return. 'all' requests every field of the account.",
    },
    *_return_all("employees"),
    {
        "displayName": "Update Fields",
        "name": "updateFields",
        "type": "collection",
        "placeholder": "Add Field",
        "displayOptions": _show(resource=["employees"], operation=["update"]),
        "default": {},
        "options": [
            {"displayName": "First Name", "name": "firstName", "type": "string", "default": ""},
            {"displayName": "Last Name", "name": "lastName", "type": "string", "default": ""},
            *EMPLOYEE_FIELD_OPTIONS,
        ],
    },
]


def _file_descriptions(resource: str, employee_scoped: bool) -> List[Dict[str, Any]]:
    """Operations shared by employee and company files."""
    scope = "employee" if employee_scoped else "company"
    descriptions: List[Dict[str, Any]] = [
        {
            "displayName": "Operation",
            "name": "operation",
            "type": "options",
            "displayOptions": _show(resource=[resource]),
            "options": [
                {"name": "Delete", "value": "delete", "description": f"Delete a {scope} file"},
                {"name": "Download", "value": "download", "description": f"Download a {scope} file"},
                {"name": "Get All", "value": "getAll", "description": f"Get all {scope} files"},
                {"name": "Update", "value": "update", "description": f"Update a {scope} file"},
                {"name": "Upload", "value": "upload", "description": f"Upload a {scope} file"},
            ],
            "default": "delete",
        },
    ]
    if employee_scoped:
        descriptions.append({
            "displayName": "Employee ID",
            "name": "employeeId",
            "type": "string",
            "displayOptions": _show(resource=[resource]),
            "required": True,
            "default": "",
        })
    descriptions.extend([
        {
            "displayName": "File ID",
            "name": "fileId",
            "type": "string",
            "displayOptions": _show(resource=[resource], operation=["delete", "download", "update"]),
            "required": True,
            "default": "",
            "description": "ID of the file",
        },
        {
            "displayName": "Put Output In Field",
            "name": "output",
            "type": "string",
            "displayOptions": _show(resource=[resource], operation=["download"]),
            "required": True,
            "default": "data",
            "description": "The name of the output field to put the binary file data in",
        },
        *_return_all(resource),
        {
            "displayName": "Update Fields",
            "name": "updateFields",
            "type": "collection",
            "placeholder": "Add Field",
            "displayOptions": _show(resource=[resource], operation=["update"]),
            "default": {},
            "options": [
                {"displayName": "Category ID", "name": "categoryId", "type": "string", "default": ""},
                {"displayName": "Name", "name": "name", "type": "string", "default": "",
                 "description": "Renames the file"},
                {"displayName": "Share with Employee", "name": "shareWithEmployee", "type": "boolean",
                 "default": True},
            ],
        },
        {
            "displayName": "Input Data Field Name",
            "name": "binaryPropertyName",
            "type": "string",
            "displayOptions": _show(resource=[resource], operation=["upload"]),
            "required": True,
            "default": "data",
            "description": "The name of the input field containing the binary file data",
        },
        {
            "displayName": "Category ID",
            "name": "categoryId",
            "type": "string",
            "displayOptions": _show(resource=[resource], operation=["upload"]),
            "required": True,
            "default": "",
            "description": "ID of the file category to upload into",
        },
        {
            "displayName": "Options",
            "name": "options",
            "type": "collection",
            "placeholder": "Add Option",
            "displayOptions": _show(resource=[resource], operation=["upload"]),
            "default": {},
            "options": [
                {"displayName": "Share with Employee", "name": "share", "type": "boolean", "default": True},
            ],
        },
    ])
    return descriptions


EMPLOYEE_FILE_DESCRIPTIONS = _file_descriptions("employeeFiles", employee_scoped=True)
COMPANY_FILE_DESCRIPTIONS = _file_descriptions("companyFiles", employee_scoped=False)


PARAMETERS: List[Dict[str, Any]] = [
    {
        "displayName": "Resource",
        "name": "resource",
        "type": "options",
        "options": [
            {"name": "Employees", "value": "employees"},
            {"name": "Employee Files", "value": "employeeFiles"},
            {"name": "Company Files", "value": "companyFiles"},
        ],
        "default": "employees",
        "description": "The resource to operate on",
    },
    *EMPLOYEE_DESCRIPTIONS,
    *EMPLOYEE_FILE_DESCRIPTIONS,
    *COMPANY_FILE_DESCRIPTIONS,
]


__all__ = [
    "COMPANY_FILE_DESCRIPTIONS",
    "EMPLOYEE_DESCRIPTIONS",
    "EMPLOYEE_FILE_DESCRIPTIONS",
    "PARAMETERS",
]
