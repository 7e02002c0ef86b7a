"""Browser identities for short-link requests.

Short-link hosts answer plain HTTP clients with an interstitial instead of a
redirect, so each resolution request borrows a real browser's User-Agent.
Resolutions run on worker threads, so the pool hands agents out under a lock,
starting from a random slot so separate runs do not all lead with the same
agent.

Typical Usage:
    from tiktoktrim.user_agent_pool import user_agent_pool

    headers = {"User-Agent": user_agent_pool.get_next()}
"""

import random
import threading
from typing import List
from tiktoktrim.config import USER_AGENT_POOL


class UserAgentPool:
    """Cycles through a fixed list of User-Agent strings."""

    def __init__(self, agents: List[str]):
        """
        Args:
            agents: User-Agent strings; copied, so later edits to the list are ignored

        Raises:
            ValueError: If agents is empty
        """
        if not agents:
            raise ValueError("User agent pool cannot be empty")

        self._agents = list(agents)
        self._position = random.randrange(len(self._agents))
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._agents)

    def get_next(self) -> str:
        """Return the agent at the current slot and advance, wrapping at the end."""
        with self._lock:
            agent = self._agents[self._position]
            self._position = (self._position + 1) % len(self._agents)
        return agent


# Shared by every resolver in the process
user_agent_pool = UserAgentPool(USER_AGENT_POOL)
