"""
Running the catalog and summarizing outcomes.

Skipped scenarios are counted separately from passed ones and never affect
the exit code, so "0 failures" cannot be confused with "everything skipped".
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd
from typecompat.catalog import CATALOG, ScenarioTemplate, TypeScenario
from typecompat.catalog import select_templates
from typecompat.exceptions import SetupError
from typecompat.verify import Outcome, Status, Verifier

from libb import attrdict

__all__ = ['RunSummary', 'run_catalog']

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ['scenario', 'column_type', 'insert_literal', 'status',
                 'reason', 'elapsed']


@dataclass(frozen=True)
class RunSummary:
    """Outcomes of one run against one backend.
    """
    backend: str
    outcomes: tuple[Outcome, ...]

    def _with(self, status: Status) -> list[Outcome]:
        return [o for o in self.outcomes if o.status is status]

    @property
    def passed(self) -> list[Outcome]:
        return self._with(Status.PASSED)

    @property
    def failed(self) -> list[Outcome]:
        return self._with(Status.FAILED)

    @property
    def skipped(self) -> list[Outcome]:
        return self._with(Status.SKIPPED)

    def counts(self) -> attrdict:
        return attrdict(passed=len(self.passed), failed=len(self.failed),
                        skipped=len(self.skipped))

    @property
    def exit_code(self) -> int:
        """0 iff no scenario failed."""
        return 1 if self.failed else 0

    def describe(self) -> str:
        """Summary line plus one line per failure and per skip."""
        counts = self.counts()
        lines = [f'{self.backend}: {counts.passed} passed, {counts.failed} failed, '
                 f'{counts.skipped} skipped']
        lines.extend(str(o) for o in self.failed)
        lines.extend(str(o) for o in self.skipped)
        return '\n'.join(lines)

    def log(self) -> None:
        level = logging.WARNING if self.failed else logging.INFO
        for line in self.describe().splitlines():
            logger.log(level, line)

    def to_frame(self) -> pd.DataFrame:
        """One row per scenario outcome."""
        records = [{
            'scenario': o.scenario.name,
            'column_type': o.scenario.column_type,
            'insert_literal': o.scenario.insert_literal,
            'status': o.status.value,
            'reason': o.reason,
            'elapsed': o.elapsed,
        } for o in self.outcomes]
        return pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)


def _run_template(verifier: Verifier, template: ScenarioTemplate) -> Outcome:
    try:
        scenario = template.resolve(verifier.adapter)
    except Exception as err:
        logger.error(f'{template.name}: cannot resolve against {verifier.adapter.name}: {err}')
        scenario = TypeScenario(template.name, template.column_type or template.spelling or '',
                                template.literal, template.value)
        error = SetupError(f'Cannot resolve {template.name} for {verifier.adapter.name}: {err}')
        error.__cause__ = err
        return Outcome(scenario, Status.FAILED, str(error), error=error)
    return verifier.run(scenario)


def run_catalog(verifier: Verifier, select: Iterable[str] | None = None,
                catalog: Iterable[ScenarioTemplate] = CATALOG) -> RunSummary:
    """Run every selected catalog scenario in order against one verifier.

    `select` holds fnmatch patterns over scenario names, e.g. ['numeric_*'].
    One scenario's failure never stops the rest, including a template the
    adapter cannot resolve.
    """
    templates = select_templates(select, catalog)
    logger.info(f'Running {len(templates)} scenario(s) against {verifier.adapter.name}')
    outcomes = tuple(_run_template(verifier, template) for template in templates)
    summary = RunSummary(verifier.adapter.name, outcomes)
    summary.log()
    return summary
