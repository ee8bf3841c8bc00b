from models.search import Candidate, Mode
from orchestrator.direct_strategy import DirectStrategy
from orchestrator.web_strategy import WebStrategy


class BranchDispatcher:
    """Runs exactly one strategy for the routed mode."""

    def __init__(self, direct: DirectStrategy, web: WebStrategy):
        self.direct = direct
        self.web = web

    async def dispatch(self, query: str, mode: Mode) -> Candidate:
        if mode == Mode.WEB:
            return await self.web.run(query)
        if mode == Mode.DIRECT:
            return await self.direct.run(query)
        raise ValueError(f"Unknown mode: {mode!r}")
