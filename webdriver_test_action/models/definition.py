"""Models for run definitions loaded from YAML files or CLI arguments."""

from collections.abc import Mapping, Sequence

from pydantic import Field

from webdriver_test_action.models.base import Model

DEFAULT_BROWSER = "firefox"


class RunOptions(Model):
    """Fully resolved options for a single browser run."""

    browser: str = Field(default=DEFAULT_BROWSER, description="Browser name")
    urls: Sequence[str] = Field(
        default_factory=list, description="Pages to visit, in order"
    )
    poll_interval: float = Field(
        default=0.5, gt=0, description="Seconds between result polls"
    )
    result_timeout: float | None = Field(
        default=600,
        gt=0,
        description="Seconds to wait for results per URL (None waits forever)",
    )
    results_global: str = Field(
        default="mochaResults",
        description="Name of the window global the page publishes results on",
    )


class TargetOptions(Model):
    """Partial options; only the fields that are set override the defaults."""

    browser: str | None = None
    urls: Sequence[str] | None = None
    poll_interval: float | None = Field(default=None, gt=0)
    result_timeout: float | None = Field(default=None, gt=0)
    results_global: str | None = None

    def apply_to(self, options: RunOptions) -> RunOptions:
        """Return ``options`` updated with every field explicitly set here."""
        overrides = self.model_dump(exclude_unset=True)
        return RunOptions.model_validate(options.model_dump() | overrides)


class RunDefinition(Model):
    """Complete run definition: shared options plus named targets."""

    version: str = Field(default="1.0", description="Definition schema version")
    options: TargetOptions = Field(
        default_factory=TargetOptions, description="Options shared by all targets"
    )
    targets: Mapping[str, TargetOptions] = Field(
        default_factory=dict, description="Targets keyed by name"
    )

    def resolve_targets(self) -> Mapping[str, RunOptions]:
        """Merge defaults, shared options and target options, in that order.

        Targets keep the order in which they were defined.
        """
        shared = self.options.apply_to(RunOptions())
        return {
            name: target.apply_to(shared) for name, target in self.targets.items()
        }
