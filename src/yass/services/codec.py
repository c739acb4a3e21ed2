"""
Save Codec for YASS

This module encodes and decodes save records in the three supported formats:
binary (MessagePack through msgspec), JSON and XML.
"""

import json
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Optional

import msgspec

from yass.models.errors import DecodeError, EncodeError, SaveIOError, SaveRecordError
from yass.models.save_record import SaveRecord, field_types, element_type
from yass.models.save_settings import SaveFormat, SaveSettings, JSON_FILE_EXTENSION, XML_FILE_EXTENSION

XML_ROOT_TAG = "SaveRecord"
XML_ITEM_TAG = "item"

# Characters XML 1.0 cannot represent, not even as character references
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class SaveCodec:
    """
    Encoder/decoder for save records.

    The format is always chosen by the caller (settings, explicit argument or
    file extension), never sniffed from the payload.
    """

    def __init__(self):
        """Initialize the codec."""
        self.logger = logging.getLogger("YASS")

    def encode(self, record: SaveRecord, save_format: SaveFormat) -> bytes:
        """
        Encode a record.

        Args:
            record: The record to encode
            save_format: Target format

        Returns:
            bytes: The encoded payload

        Raises:
            EncodeError: If a string holds characters the XML format cannot store
        """
        save_format = SaveFormat.parse(save_format)
        if save_format == SaveFormat.BINARY:
            return msgspec.msgpack.encode(record.to_dict())
        if save_format == SaveFormat.JSON:
            return json.dumps(record.to_dict(), indent=4, ensure_ascii=False).encode("utf-8")
        return self._encode_xml(record)

    def decode(self, data: bytes, save_format: SaveFormat) -> SaveRecord:
        """
        Decode a payload into a record.

        Args:
            data: Encoded payload
            save_format: Format the payload was written in

        Returns:
            SaveRecord: The decoded record

        Raises:
            DecodeError: If the payload is malformed, truncated or has the wrong shape
        """
        save_format = SaveFormat.parse(save_format)
        if save_format == SaveFormat.BINARY:
            try:
                payload = msgspec.msgpack.decode(data)
            except (msgspec.MsgspecError, RecursionError) as e:
                raise DecodeError(f"Invalid binary save data: {e}") from e
            return SaveRecord.from_dict(payload)

        if save_format == SaveFormat.JSON:
            # ValueError also covers integers over the int string conversion limit
            try:
                payload = json.loads(data.decode("utf-8") if isinstance(data, bytes) else data)
            except (ValueError, RecursionError) as e:
                raise DecodeError(f"Invalid JSON save data: {e}") from e
            return SaveRecord.from_dict(payload)

        return self._decode_xml(data)

    def try_decode(self, data: bytes, save_format: SaveFormat) -> Optional[SaveRecord]:
        """
        Decode a payload, returning None instead of raising.

        Args:
            data: Encoded payload
            save_format: Format the payload was written in

        Returns:
            SaveRecord if the payload is valid, None otherwise
        """
        try:
            return self.decode(data, save_format)
        except DecodeError as e:
            self.logger.debug(f"Could not decode {save_format} payload: {e}")
            return None

    def read_file(self, path: Path, save_format: SaveFormat) -> Optional[SaveRecord]:
        """
        Read and decode a save file.

        Args:
            path: Path to the save file
            save_format: Format to decode with

        Returns:
            SaveRecord if the file could be read and decoded, None otherwise
        """
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            self.logger.warning(f"Failed to read save file {path}: {e}")
            return None

        record = self.try_decode(data, save_format)
        if record is None:
            self.logger.warning(f"File {Path(path).name} exists but is not a valid save")
        return record

    def write_file(self, path: Path, record: SaveRecord, save_format: SaveFormat) -> Path:
        """
        Encode a record and write it to a file, replacing any existing file.

        Args:
            path: Destination path
            record: The record to write
            save_format: Format to encode with

        Returns:
            Path: The written path

        Raises:
            EncodeError: If the record cannot be encoded, nothing is written
            SaveIOError: If the file could not be written
        """
        data = self.encode(record, save_format)
        path = Path(path)
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise SaveIOError(f"Failed to write save file {path}: {e}") from e

        self.logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path

    @staticmethod
    def format_for_path(path: Path, settings: SaveSettings) -> Optional[SaveFormat]:
        """
        Get the format of a file from its extension.

        Args:
            path: Path to the save file
            settings: Settings providing the binary extension

        Returns:
            SaveFormat if the extension is recognized, None otherwise
        """
        suffix = Path(path).suffix
        if suffix == settings.binary_extension:
            return SaveFormat.BINARY
        if suffix == JSON_FILE_EXTENSION:
            return SaveFormat.JSON
        if suffix == XML_FILE_EXTENSION:
            return SaveFormat.XML
        return None

    def _encode_xml(self, record: SaveRecord) -> bytes:
        root = ET.Element(XML_ROOT_TAG)
        for name, value in record.to_dict().items():
            element = ET.SubElement(root, name)
            if isinstance(value, list):
                for item in value:
                    ET.SubElement(element, XML_ITEM_TAG).text = _to_xml_text(item)
            else:
                element.text = _to_xml_text(value)

        ET.indent(root)
        # The parser normalizes a raw carriage return to a newline
        return ET.tostring(root, encoding="utf-8", xml_declaration=True).replace(b"\r", b"&#13;")

    def _decode_xml(self, data: bytes) -> SaveRecord:
        try:
            root = ET.fromstring(data)
        except (ET.ParseError, RecursionError) as e:
            raise DecodeError(f"Invalid XML save data: {e}") from e

        if root.tag != XML_ROOT_TAG:
            raise DecodeError(f"Unexpected XML root element '{root.tag}'")

        payload: Dict[str, Any] = {}
        for name, annotation in field_types().items():
            element = root.find(name)
            if element is None:
                continue

            item_type = element_type(annotation)
            if item_type is not None:
                payload[name] = [_from_xml_text(name, item_type, item.text)
                                 for item in element.findall(XML_ITEM_TAG)]
            else:
                payload[name] = _from_xml_text(name, annotation, element.text)

        return SaveRecord.from_dict(payload)


def _to_xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)

    text = str(value)
    invalid = INVALID_XML_CHARS.search(text)
    if invalid:
        raise EncodeError(f"Character {invalid.group()!r} cannot be stored in an XML save")
    return text


def _from_xml_text(name: str, value_type: Any, text: Optional[str]) -> Any:
    text = text or ""
    if value_type is str:
        return text

    text = text.strip()
    if value_type is bool:
        if text in ("true", "false"):
            return text == "true"
        raise SaveRecordError(f"Field '{name}' expects a boolean, got {text!r}")

    try:
        return value_type(text)
    except (TypeError, ValueError) as e:
        raise SaveRecordError(f"Field '{name}' expects {value_type.__name__}, got {text!r}") from e
