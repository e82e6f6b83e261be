"""邮件值对象模块"""

from domain.mail.value_objects.search_criteria import SearchCriteria
from domain.mail.value_objects.candidate_message import CandidateMessage

__all__ = [
    "SearchCriteria",
    "CandidateMessage",
]
