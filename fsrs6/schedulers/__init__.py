from fsrs6.schedulers.base import Scheduler
from fsrs6.schedulers.basic import BasicScheduler
from fsrs6.schedulers.long_term import LongTermScheduler

__all__ = ["Scheduler", "BasicScheduler", "LongTermScheduler"]
