from .byte_source import ByteSource

__all__ = ["ByteSource"]
