"""Java object serialization stream elements."""

from . import utf as utf
from .constants import TC_STRING as TC_STRING
from .field import FieldDescriptor as FieldDescriptor
from .field import decode_field_list as decode_field_list
from .field import encode_field_list as encode_field_list
from .serialization import DecodeError as DecodeError
from .serialization import EncodeError as EncodeError
from .serialization import InvalidTypeState as InvalidTypeState
from .serialization import MalformedDiscriminant as MalformedDiscriminant
from .serialization import MalformedStringEnvelope as MalformedStringEnvelope
from .serialization import MissingFieldTypeSignature as MissingFieldTypeSignature
from .serialization import SerializationError as SerializationError
from .serialization import StringDecodeError as StringDecodeError
from .serialization import StringEncodeError as StringEncodeError
from .types import OBJECT_TYPE_CODES as OBJECT_TYPE_CODES
from .types import PRIMITIVE_TYPE_CODES as PRIMITIVE_TYPE_CODES
from .types import TYPE_CODES as TYPE_CODES
from .types import FieldType as FieldType
from .types import is_object as is_object
from .types import is_primitive as is_primitive
from .types import is_type_valid as is_type_valid
