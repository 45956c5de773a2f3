"""
Close Expired Submissions Management Command

Schließt alle laufenden Prüfungsversuche ab, deren Zeitlimit
(start_time + Dauer + EXAM_DEADLINE_GRACE_SECONDS) abgelaufen ist.
Der Punktestand wird wie bei einer regulären Abgabe aus den Antworten summiert.

Typischer Einsatz: periodisch per Cron.

Author: DSP Development Team
Version: 1.0.0
"""

import logging

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from examination.services.submissions import submission_service
from examination.submissions.models import Submission

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Schließt laufende Prüfungsversuche ab, deren Zeitlimit abgelaufen ist."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Nur anzeigen, welche Versuche abgeschlossen würden.",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        self.stdout.write(f"Suche nach abgelaufenen Versuchen (Stand {now.strftime('%Y-%m-%d %H:%M:%S')})...")

        if options["dry_run"]:
            expired = [
                s for s in Submission.objects.filter(completed=False).select_related("exam", "user")
                if s.is_expired(now)
            ]
            if not expired:
                self.stdout.write(self.style.SUCCESS("Keine abgelaufenen Versuche gefunden."))
                return
            for submission in expired:
                self.stdout.write(
                    f"  - Versuch {submission.pk}: {submission.user.username}, "
                    f"Prüfung {submission.exam.code}, Frist {submission.deadline.strftime('%Y-%m-%d %H:%M:%S')}"
                )
            self.stdout.write(f"{len(expired)} Versuche würden abgeschlossen.")
            return

        try:
            closed = submission_service.close_expired_submissions(now)
        except Exception as e:
            logger.error(f"Fehler beim Ausführen von close_expired_submissions: {e}", exc_info=True)
            raise CommandError(f"Ein Fehler ist aufgetreten: {e}")

        if closed == 0:
            self.stdout.write(self.style.SUCCESS("Keine abgelaufenen Versuche gefunden."))
        else:
            self.stdout.write(self.style.SUCCESS(f"{closed} Versuche abgeschlossen."))
