"""
Examination Package - DSP (Digital Solutions Platform)

Dieses Paket enthält alle Module für die Online-Prüfungsplattform.
Lehrende erstellen zeitlich begrenzte Prüfungen und teilen einen Zugangscode,
Studierende legen die Prüfung ab und erhalten eine automatische Bewertung.

Features:
- Prüfungserstellung mit Freitext-, Multiple-Choice- und Wahr/Falsch-Fragen
- Zeitlich begrenzte Prüfungsversuche mit serverseitiger Frist
- Automatische Bewertung objektiver Fragen
- Manuelle Bewertung von Freitextantworten und Einspruchsverfahren

Struktur:
- users/: Benutzerprofile und Registrierung
- exams/: Prüfungen und Fragen
- submissions/: Prüfungsversuche, Antworten und Überprüfungsanträge
- services/: Entity Store, Bewertung, Zustandsautomat, Überprüfungen
- management/: Django Management Commands

Author: DSP Development Team
Created: 10.07.2025
Version: 1.0.0
"""
