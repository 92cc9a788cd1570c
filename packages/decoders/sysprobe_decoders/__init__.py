"""Pure decoders for binary sysfs blobs and /proc/net hex fields."""

from .addresses import IPV4_SEPARATOR, IPV6_SEPARATOR, decode_address, decode_endpoint, decode_port, hex_value
from .byteorder import u16, u32, u64
from .errors import FibTrieFormatError, MalformedSourceError
from .gpu_metrics import decode_gpu_metrics
from .models import GpuMetrics, RouteStatus, RouteType

__all__ = [
    "FibTrieFormatError",
    "GpuMetrics",
    "IPV4_SEPARATOR",
    "IPV6_SEPARATOR",
    "MalformedSourceError",
    "RouteStatus",
    "RouteType",
    "decode_address",
    "decode_endpoint",
    "decode_gpu_metrics",
    "decode_port",
    "hex_value",
    "u16",
    "u32",
    "u64",
]
