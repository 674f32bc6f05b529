"""Mapping – derive (subject, action, resource) from inbound requests."""
from policy_gateway.mapping.mapper import UNKNOWN_ACTION, RequestMapper, action_for_method
from policy_gateway.mapping.rules import DEFAULT_RULES, MappingRule, ResourceExtractor, compile_path_pattern

__all__ = [
    "DEFAULT_RULES",
    "MappingRule",
    "RequestMapper",
    "ResourceExtractor",
    "UNKNOWN_ACTION",
    "action_for_method",
    "compile_path_pattern",
]
