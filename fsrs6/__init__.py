from fsrs6.algorithm import Algorithm, MemoryState
from fsrs6.alea import Alea, AleaState, alea
from fsrs6.config_loader import load_parameters
from fsrs6.core import (
    GRADES,
    Card,
    Rating,
    RecordLogItem,
    ReviewLog,
    State,
    create_empty_card,
)
from fsrs6.errors import (
    FSRSError,
    InvalidElapsed,
    InvalidGrade,
    InvalidMemoryState,
    InvalidParameters,
    InvalidRetention,
    InvalidStepDuration,
    UnknownCardState,
)
from fsrs6.fsrs import FSRS
from fsrs6.parameters import (
    Parameters,
    check_parameters,
    clip_parameters,
    generate_parameters,
    migrate_parameters,
)
from fsrs6.schedulers import BasicScheduler, LongTermScheduler, Scheduler
from fsrs6.strategies import (
    Strategies,
    basic_learning_steps_strategy,
    convert_step_unit_to_minutes,
    default_init_seed_strategy,
    gen_seed_strategy_with_card_id,
)

__all__ = [
    "Algorithm",
    "MemoryState",
    "Alea",
    "AleaState",
    "alea",
    "load_parameters",
    "GRADES",
    "Card",
    "Rating",
    "RecordLogItem",
    "ReviewLog",
    "State",
    "create_empty_card",
    "FSRSError",
    "InvalidElapsed",
    "InvalidGrade",
    "InvalidMemoryState",
    "InvalidParameters",
    "InvalidRetention",
    "InvalidStepDuration",
    "UnknownCardState",
    "FSRS",
    "Parameters",
    "check_parameters",
    "clip_parameters",
    "generate_parameters",
    "migrate_parameters",
    "BasicScheduler",
    "LongTermScheduler",
    "Scheduler",
    "Strategies",
    "basic_learning_steps_strategy",
    "convert_step_unit_to_minutes",
    "default_init_seed_strategy",
    "gen_seed_strategy_with_card_id",
]
