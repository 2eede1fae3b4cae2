"""
Grammar constants and service configuration
"""

import os

# Contract block
CONTRACT_MEMBER = "kotlin.contracts.contract"
INVOCATION_KIND_CLASS = "kotlin.contracts.InvocationKind"
INDENT = "  "

# Expression operators, keyed by is_negated
EQUALS_OPERATOR = {
    False: "==",
    True: "!="
}

INSTANCE_OPERATOR = {
    False: "is",
    True: "!is"
}

NULL_LITERAL = "null"
RECEIVER_PREFIX = "this@"

# Used for canonical text, where no function is bound
PLACEHOLDER_PARAMETER = "${index}"

# Effect keywords
RETURNS_KEYWORD = "returns"
RETURNS_NOT_NULL_KEYWORD = "returnsNotNull()"
CALLS_IN_PLACE_KEYWORD = "callsInPlace"
IMPLIES_KEYWORD = " implies "
AND_SEPARATOR = " && "
OR_SEPARATOR = " || "

# Functions with more parameters than this are wrapped one per line
MAX_INLINE_PARAMETERS = 2

# Render service
DEFAULT_HOST = os.getenv("CONTRACTPOET_HOST", "0.0.0.0")
DEFAULT_PORT = int(os.getenv("CONTRACTPOET_PORT", "8000"))
