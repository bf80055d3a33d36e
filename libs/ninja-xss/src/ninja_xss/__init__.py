"""ninja-xss: Context-aware input validation and output encoding for Ninja Stack."""

from ninja_xss.api import XSSAPI, XSSRuntime, initialize
from ninja_xss.config import XSSConfig
from ninja_xss.errors import InvalidInputError, URISyntaxError, XSSError
from ninja_xss.filter import NH3ContentFilter, ProtectionContext
from ninja_xss.grammar import XSSGrammar, compile_grammar
from ninja_xss.protocols import ContentFilter, HrefPolicy, JSONParser, XMLParser
from ninja_xss.structured import JSONStructureParser, SAXStructureParser
from ninja_xss.uri import MangleableURI, encode_attribute_unsafe, mangle_namespaces

__all__ = [
    "ContentFilter",
    "HrefPolicy",
    "InvalidInputError",
    "JSONParser",
    "JSONStructureParser",
    "MangleableURI",
    "NH3ContentFilter",
    "ProtectionContext",
    "SAXStructureParser",
    "URISyntaxError",
    "XMLParser",
    "XSSAPI",
    "XSSConfig",
    "XSSError",
    "XSSGrammar",
    "XSSRuntime",
    "compile_grammar",
    "encode_attribute_unsafe",
    "initialize",
    "mangle_namespaces",
]
