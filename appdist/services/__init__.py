"""Application services for a distribution run.

Services implement the run's steps, coordinating between the domain layer
(core/) and infrastructure (platform/, git/).
"""

from appdist.services.auth import Credentials, provision_credentials
from appdist.services.firebase import (
    DistributionOutcome,
    Distributor,
    FirebaseCliDistributor,
    parse_distribution_output,
)
from appdist.services.inputs import ResolvedFile, resolve_files
from appdist.services.notes import ReleaseNote, synthesize_release_note
from appdist.services.sequencer import DistributionRun, RunResult

__all__ = [
    "Credentials",
    "DistributionOutcome",
    "DistributionRun",
    "Distributor",
    "FirebaseCliDistributor",
    "ReleaseNote",
    "ResolvedFile",
    "RunResult",
    "parse_distribution_output",
    "provision_credentials",
    "resolve_files",
    "synthesize_release_note",
]
