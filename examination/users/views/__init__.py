"""
Examination Users Views Package

Enthält die Views für Registrierung, Anmeldung und Benutzerinformationen.

Features:
- Registrierung mit Passwortprüfung
- JWT-Anmeldung (Body und HTTP-only Cookie)
- Logout mit Token-Invalidierung
- Abfrage der eigenen Benutzerdaten

Author: DSP Development Team
Version: 1.0.0
"""

from .auth_views import (
    ExamTokenObtainPairView,
    LogoutView,
    RegisterView,
)
from .user_self_info import CurrentUserView
