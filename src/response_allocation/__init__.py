"""
Response Allocation - Event-sourced resource allocation for emergency response

Keeps an authoritative registry of response assets and incidents, recommends
which assets to send where, and commits those recommendations against live
inventory with an auditable event trail.

Fun fact: The Red Cross emblem was adopted at the first Geneva Convention in
1864 so that medical resources in the field could be recognized - and left
alone - by every side.
"""

from response_allocation.coordinator import ResponseCoordinator

__version__ = "0.1.0"
__all__ = ["ResponseCoordinator", "__version__"]
