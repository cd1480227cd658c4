"""
Protobuf message classes for the ``bt.solar`` wire format.

The monitor firmware encodes its uploads with the schema below. Rather than
shipping protoc output, the file descriptor is assembled here and the
message classes are obtained from the protobuf runtime, so the runtime
(not this module) owns all varint / length-delimited parsing.

    package bt.solar;
    message Reading      { int32 battery_voltage = 1; int32 battery_current = 2;
                           int32 panel_voltage = 3; int32 panel_power = 4;
                           int32 load_current = 5; }
    message UploadEntry  { int32 offset_in_seconds = 1; Reading reading = 2; }
    message Upload       { int64 start_timestamp = 1;
                           repeated UploadEntry entries = 2; }
    message StartupEvent { uint32 uptime_seconds = 1; }
    message OnlineEvent  { uint32 uptime_seconds = 1; }
    message OfflineEvent { uint32 uptime_seconds = 1; }
    message SystemEvent  { int64 timestamp = 1;
                           oneof event { StartupEvent startup_event = 2;
                                         OnlineEvent online_event = 3;
                                         OfflineEvent offline_event = 4; } }

CHANGELOG:
- 2026-10-15: Add SystemEvent and its variants (STORY-004)
- 2026-10-14: Initial creation with Upload/UploadEntry/Reading (STORY-003)

TODO:
- None
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf.message_factory import GetMessageClass

PACKAGE = "bt.solar"

_Field = descriptor_pb2.FieldDescriptorProto

READING_FIELDS: tuple[str, ...] = (
    "battery_voltage",
    "battery_current",
    "panel_voltage",
    "panel_power",
    "load_current",
)
"""Reading field names in field-number order (1..5)."""

EVENT_VARIANTS: tuple[str, ...] = ("startup_event", "online_event", "offline_event")
"""SystemEvent oneof members in field-number order (2..4)."""

_EVENT_MESSAGES: tuple[str, ...] = ("StartupEvent", "OnlineEvent", "OfflineEvent")


def _scalar(message: descriptor_pb2.DescriptorProto, name: str, number: int, kind: int) -> None:
    message.field.add(name=name, number=number, type=kind, label=_Field.LABEL_OPTIONAL)


def _nested(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    type_name: str,
    *,
    repeated: bool = False,
    oneof_index: int | None = None,
) -> None:
    field = message.field.add(
        name=name,
        number=number,
        type=_Field.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.{type_name}",
        label=_Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
    )
    if oneof_index is not None:
        field.oneof_index = oneof_index


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Assemble the FileDescriptorProto for ``bt/solar/readings.proto``."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="bt/solar/readings.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    reading = file_proto.message_type.add(name="Reading")
    for number, name in enumerate(READING_FIELDS, start=1):
        _scalar(reading, name, number, _Field.TYPE_INT32)

    entry = file_proto.message_type.add(name="UploadEntry")
    _scalar(entry, "offset_in_seconds", 1, _Field.TYPE_INT32)
    _nested(entry, "reading", 2, "Reading")

    upload = file_proto.message_type.add(name="Upload")
    _scalar(upload, "start_timestamp", 1, _Field.TYPE_INT64)
    _nested(upload, "entries", 2, "UploadEntry", repeated=True)

    for message_name in _EVENT_MESSAGES:
        event_body = file_proto.message_type.add(name=message_name)
        _scalar(event_body, "uptime_seconds", 1, _Field.TYPE_UINT32)

    system_event = file_proto.message_type.add(name="SystemEvent")
    _scalar(system_event, "timestamp", 1, _Field.TYPE_INT64)
    system_event.oneof_decl.add(name="event")
    for number, (variant, message_name) in enumerate(
        zip(EVENT_VARIANTS, _EVENT_MESSAGES), start=2
    ):
        _nested(system_event, variant, number, message_name, oneof_index=0)

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(build_file_descriptor().SerializeToString())


def _message_class(name: str) -> type:
    return GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Reading = _message_class("Reading")
UploadEntry = _message_class("UploadEntry")
Upload = _message_class("Upload")
StartupEvent = _message_class("StartupEvent")
OnlineEvent = _message_class("OnlineEvent")
OfflineEvent = _message_class("OfflineEvent")
SystemEvent = _message_class("SystemEvent")
