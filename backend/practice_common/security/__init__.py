"""
Request identity helpers.
"""

from practice_common.security.context import RequestContext, get_request_context

__all__ = ["RequestContext", "get_request_context"]
