"""
Encoding package - traversal of structured values into triples.

Components:
- resolver: MappingResolver, type and field name to rule resolution
- context: SubjectContextStack, the chain of records being encoded
- encoder: StructuredValueEncoder and the encode() entry points
"""

from .resolver import MappingResolver, FieldRole, FieldResolution
from .context import SubjectContext, SubjectContextStack
from .encoder import StructuredValueEncoder, encode, encode_with_result

__all__ = [
    'MappingResolver',
    'FieldRole',
    'FieldResolution',
    'SubjectContext',
    'SubjectContextStack',
    'StructuredValueEncoder',
    'encode',
    'encode_with_result',
]
