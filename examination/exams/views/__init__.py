"""
Examination Exams Views Package

Views für Prüfungen und Fragen: Ersteller verwalten ihre Prüfungen,
Teilnehmer finden sie über den Prüfungscode.

Author: DSP Development Team
Version: 1.0.0
"""

from .exam_views import *
from .question_views import *
