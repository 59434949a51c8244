from .charset import CharacterSet, EncodeType
from .coded import CodedData, DecodedData, EncodedData, Substitution
from .decoder import decode, decode_chars, decode_chars_to, decode_to
from .encoder import (
    encode,
    encode_char,
    encode_filter,
    encode_filter_to,
    encode_to,
    encode_with,
    encode_with_to,
)
from .tokens import CharEntity, DecodeError, EntityForm, ErrorKind, StrictDecodeError

__version__ = "1.0.0"

__all__ = [
    "CharEntity",
    "CharacterSet",
    "CodedData",
    "DecodeError",
    "DecodedData",
    "EncodeType",
    "EncodedData",
    "EntityForm",
    "ErrorKind",
    "StrictDecodeError",
    "Substitution",
    "decode",
    "decode_chars",
    "decode_chars_to",
    "decode_to",
    "encode",
    "encode_char",
    "encode_filter",
    "encode_filter_to",
    "encode_to",
    "encode_with",
    "encode_with_to",
]
