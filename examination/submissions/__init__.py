"""
Examination Submissions Package - DSP (Digital Solutions Platform)

Dieses Paket enthält Prüfungsversuche, Antworten und Überprüfungsanträge.

Struktur:
- models.py: Submission, Answer, ReviewRequest
- serializers.py: API-Serialisierung für Versuche und Antworten
- views/: Schüler-Views (Ablegen, Einspruch) und Lehrer-Views (Bewertung)
"""
