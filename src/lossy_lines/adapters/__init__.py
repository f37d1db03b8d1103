from .contracts import AdapterMeta, adapter, get_adapter_meta
from .file_io import (
    FileLineSource,
    FileOutputSink,
    StreamLineSource,
    StreamOutputSink,
    file_line_source,
    file_output_sink,
    stdin_line_source,
    stdout_output_sink,
)
from .registry import AdapterRegistry, AdapterRegistryError

__all__ = [
    "adapter",
    "AdapterMeta",
    "get_adapter_meta",
    "AdapterRegistry",
    "AdapterRegistryError",
    "FileLineSource",
    "StreamLineSource",
    "FileOutputSink",
    "StreamOutputSink",
    "file_line_source",
    "stdin_line_source",
    "file_output_sink",
    "stdout_output_sink",
]
