"""
Examination Exams Package - DSP (Digital Solutions Platform)

Dieses Paket enthält Prüfungen und Fragen.

Struktur:
- models.py: Exam, Question, QuestionType
- serializers.py: API-Serialisierung für Prüfungen und Fragen
- views/: Prüfungs- und Fragen-Views für Ersteller
"""
