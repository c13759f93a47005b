"""Pre-deployment checklist: toggleable options under a wrapping cursor."""

from __future__ import annotations

from dataclasses import dataclass, replace

SEND_RELEASE_MAIL = "Send release mail"


def pipeline_label(repository_label: str) -> str:
    return f"Start {repository_label} pipeline"


@dataclass(frozen=True, slots=True)
class DeploymentOption:
    label: str
    enabled: bool


@dataclass(frozen=True, slots=True)
class DeploymentChecklist:
    """Ordered options plus the index of the option under the cursor.

    Instances are immutable; every operation returns a new checklist with the
    cursor still inside ``[0, len(options))``.
    """

    options: tuple[DeploymentOption, ...]
    cursor: int = 0

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("checklist requires at least one option")
        if not 0 <= self.cursor < len(self.options):
            raise ValueError(f"cursor {self.cursor} out of range for {len(self.options)} options")

    def __len__(self) -> int:
        return len(self.options)

    @property
    def option_under_cursor(self) -> DeploymentOption:
        return self.options[self.cursor]

    def move_up(self) -> DeploymentChecklist:
        return replace(self, cursor=(self.cursor - 1) % len(self.options))

    def move_down(self) -> DeploymentChecklist:
        return replace(self, cursor=(self.cursor + 1) % len(self.options))

    def toggle(self) -> DeploymentChecklist:
        """Flip the option under the cursor."""
        current = self.options[self.cursor]
        flipped = replace(current, enabled=not current.enabled)
        options = self.options[: self.cursor] + (flipped,) + self.options[self.cursor + 1 :]
        return replace(self, options=options)

    def is_enabled(self, label: str) -> bool:
        for option in self.options:
            if option.label == label:
                return option.enabled
        raise KeyError(label)


def default_checklist(left_label: str, right_label: str) -> DeploymentChecklist:
    """Release mail off, both pipelines on, cursor on the first option."""
    return DeploymentChecklist(
        options=(
            DeploymentOption(SEND_RELEASE_MAIL, enabled=False),
            DeploymentOption(pipeline_label(left_label), enabled=True),
            DeploymentOption(pipeline_label(right_label), enabled=True),
        )
    )
