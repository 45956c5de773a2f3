"""
Examination Services Package

Geschäftslogik der Prüfungsplattform, unabhängig von der HTTP-Schicht.

Struktur:
- store/: Entity Store über dem Django ORM
- grading/: Bewertungslogik (Antwortschlüssel, automatische Bewertung, manuelle Bewertung)
- submissions/: Zustandsautomat für Prüfungsversuche
- reviews/: Überprüfungsanträge und manuelle Bewertung

Author: DSP Development Team
Version: 1.0.0
"""
