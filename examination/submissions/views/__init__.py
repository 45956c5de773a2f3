"""
Examination Submissions Views Package

Features:
- Teilnehmer-Views: Versuch starten, Antworten abgeben, abschließen, Überprüfung beantragen
- Ersteller-Views: Versuche und Ergebnisse einsehen, Antworten bewerten, Anträge ablehnen

Author: DSP Development Team
Version: 1.0.0
"""

from .student_views import *
from .teacher_views import *
