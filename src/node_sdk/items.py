"""
Node Items - Data structures flowing through workflows.

NodeItem is the fundamental data unit in workflows.
Each item has JSON data and optional binary attachments.
return_json_array() turns whatever a node operation returned into
the flat list of output items the platform expects.
"""

from __future__ import annotations

import base64
import mimetypes
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BinaryData(BaseModel):
    """
    Binary attachment for a node item.

    Binary data is stored separately and referenced by key. On the wire
    (input and output items) it is a dict with base64 'data' and
    camelCase metadata, as the platform serializes it.
    """
    model_config = ConfigDict(extra="forbid")

    data: bytes = Field(..., description="Raw binary data")
    mime_type: str = Field("application/octet-stream", description="MIME type")
    file_name: Optional[str] = Field(None, description="Original filename")
    file_extension: Optional[str] = Field(None, description="File extension")

    @property
    def size(self) -> int:
        """Get size of binary data."""
        return len(self.data)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        file_name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> "BinaryData":
        """Build from raw bytes, guessing MIME type and extension from the name."""
        extension = None
        if file_name and "." in file_name:
            extension = file_name.rsplit(".", 1)[-1]
        if not mime_type and file_name:
            mime_type = mimetypes.guess_type(file_name)[0]
        return cls(
            data=data,
            mime_type=mime_type or "application/octet-stream",
            file_name=file_name,
            file_extension=extension,
        )

    @classmethod
    def from_item_entry(cls, entry: Dict[str, Any]) -> "BinaryData":
        """Decode a serialized binary entry taken from an input item."""
        raw = entry.get("data", "")
        if isinstance(raw, str):
            raw = base64.b64decode(raw)
        return cls(
            data=raw,
            mime_type=entry.get("mimeType") or "application/octet-stream",
            file_name=entry.get("fileName"),
            file_extension=entry.get("fileExtension"),
        )

    def to_item_entry(self) -> Dict[str, Any]:
        """Serialize for an output item."""
        entry: Dict[str, Any] = {
            "data": base64.b64encode(self.data).decode("ascii"),
            "mimeType": self.mime_type,
            "fileSize": self.size,
        }
        if self.file_name:
            entry["fileName"] = self.file_name
        if self.file_extension:
            entry["fileExtension"] = self.file_extension
        return entry


class PairedItem(BaseModel):
    """
    Reference to the source item that produced this item.

    Used for tracking data lineage through workflows.
    """
    model_config = ConfigDict(extra="forbid")

    item: int = Field(..., description="Index of source item", ge=0)
    input: int = Field(0, description="Input branch index", ge=0)


class NodeItem(BaseModel):
    """
    A single data item flowing through a workflow.

    Operations return a NodeItem instead of plain JSON when the result
    carries binary attachments (file downloads).

    Example:
        item = NodeItem(
            json_data={"fileId": "42"},
            binary={"data": BinaryData(data=b"...", mime_type="application/pdf")}
        )
    """
    model_config = ConfigDict(extra="forbid")

    json_data: Dict[str, Any] = Field(default_factory=dict, description="JSON data")
    binary: Dict[str, BinaryData] = Field(
        default_factory=dict,
        description="Binary attachments keyed by name"
    )
    paired_item: Optional[PairedItem] = Field(
        None,
        description="Reference to source item"
    )

    def to_execution_data(self, item_index: Optional[int] = None) -> Dict[str, Any]:
        """Serialize into the {'json', 'binary', 'pairedItem'} output shape."""
        paired = self.paired_item
        if paired is None and item_index is not None:
            paired = PairedItem(item=item_index)

        output: Dict[str, Any] = {"json": self.json_data}
        if self.binary:
            output["binary"] = {
                key: value.to_item_entry() for key, value in self.binary.items()
            }
        if paired is not None:
            output["pairedItem"] = {"item": paired.item}
        return output


def return_json_array(value: Any, item_index: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Normalize an operation result into output items.

    - list/tuple: one item per element, in order
    - NodeItem: emitted as-is (keeps binary attachments)
    - dict: one item
    - None: one empty item
    - any other scalar: one item as {"data": value}
    """
    if isinstance(value, (list, tuple)):
        return [_to_item(element, item_index) for element in value]
    return [_to_item(value, item_index)]


def _to_item(value: Any, item_index: Optional[int]) -> Dict[str, Any]:
    if isinstance(value, NodeItem):
        return value.to_execution_data(item_index)

    if value is None:
        json_data: Dict[str, Any] = {}
    elif isinstance(value, dict):
        json_data = value
    else:
        json_data = {"data": value}

    item: Dict[str, Any] = {"json": json_data}
    if item_index is not None:
        item["pairedItem"] = {"item": item_index}
    return item


__all__ = [
    "BinaryData",
    "NodeItem",
    "PairedItem",
    "return_json_array",
]
