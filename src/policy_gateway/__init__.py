"""
policy_gateway – Policy Decision Gateway.

Wires a web application to an external policy-decision point (OPA):
a resilient decision client plus a request-to-decision mapper and an
enforcement middleware.

Import path convention::

    from policy_gateway.decision import DecisionClient, DecisionRequest
    from policy_gateway.mapping import RequestMapper
    from policy_gateway.enforcement import EnforcementFilter
    from policy_gateway.app import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
