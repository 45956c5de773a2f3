"""
Examination Application Models Registry

This module serves as the central models registry for the examination
application. It imports and exposes all models from the logical submodules
(users, exams, submissions) so they are registered with Django's ORM.

Architecture:
- users/: User profile models
- exams/: Exam and question models
- submissions/: Submission, answer and review request models

Author: DSP Development Team
Version: 1.0.0
"""

from .users.models import *

from .exams.models import *

from .submissions.models import *
