"""Helpers shared by unit, integration and BDD tests."""

from logtree import Logger


class DeliveryLog:
    """Records which logger's stream saw which message, in delivery order."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str]] = []

    def attach(self, logger: Logger, label: str) -> None:
        """Attach a synchronous listener tagged with label."""
        logger.subscribe().listen(
            lambda record: self.entries.append((label, record.message)),
            synchronous=True,
        )
