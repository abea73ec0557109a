import logging

from .config import (
    ToonConfig,
    ToonError,
    ToonDecodeError,
    ToonEncodeError,
    ToonConfigError,
    UnsupportedSourceError,
)
from .quoting import needs_quoting, quote, unquote, unescape, format_key
from .delimiters import Delimiter, choose_delimiter, delimiter_marker, detect_delimiter, header_delimiter
from .tabular import TabularShape, analyze_tabular, is_flat_tabular
from .serializer import ToonSerializer, serialize, decode_json, json_to_toon
from .rows import FieldToken, split_row, tokenize_row, parse_scalar, decode_tabular
from .syntax import OutlineSyntaxProvider, SyntaxNode, SyntaxTreeProvider
from .regions import TabularRegion, locate_regions
from .align import (
    AlignmentReport,
    ToonDocument,
    align_buffer,
    align_region,
    align_text,
    shrink_buffer,
    shrink_region,
    shrink_text,
)
from .files import convert_file, align_file
from .stats import SizeComparison, compare_sizes

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Config / errors
    "ToonConfig",
    "ToonError",
    "ToonDecodeError",
    "ToonEncodeError",
    "ToonConfigError",
    "UnsupportedSourceError",
    # Quoting / delimiters
    "needs_quoting",
    "quote",
    "unquote",
    "unescape",
    "format_key",
    "Delimiter",
    "choose_delimiter",
    "delimiter_marker",
    "detect_delimiter",
    "header_delimiter",
    # Serializer
    "TabularShape",
    "analyze_tabular",
    "is_flat_tabular",
    "ToonSerializer",
    "serialize",
    "decode_json",
    "json_to_toon",
    # Rows / alignment
    "FieldToken",
    "split_row",
    "tokenize_row",
    "parse_scalar",
    "decode_tabular",
    "OutlineSyntaxProvider",
    "SyntaxNode",
    "SyntaxTreeProvider",
    "TabularRegion",
    "locate_regions",
    "AlignmentReport",
    "ToonDocument",
    "align_buffer",
    "align_region",
    "align_text",
    "shrink_buffer",
    "shrink_region",
    "shrink_text",
    # Files
    "convert_file",
    "align_file",
    "SizeComparison",
    "compare_sizes",
]

__version__ = "0.1.0"
