"""
Examination Django Admin Configuration

Sections:
- User Management: User admin with the profile display name inline
- Exams: Exams with their questions inline
- Submissions: Attempts with their graded answers inline, review requests

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import Answer, Exam, Profile, Question, ReviewRequest, Submission

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    verbose_name_plural = "Profile Information"
    fk_name = "user"
    fields = ("name",)
    extra = 0


class UserAdmin(BaseUserAdmin):
    inlines = (ProfileInline,)
    list_display = ("username", "email", "get_display_name", "is_staff", "is_active")
    list_select_related = ("profile",)
    search_fields = ("username", "email", "profile__name")
    ordering = ("username",)

    @admin.display(description=_("Name"))
    def get_display_name(self, instance: User) -> Optional[str]:
        try:
            return instance.profile.name
        except Profile.DoesNotExist:
            return None


admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Exam Administration ---


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    fields = ("order", "type", "text", "options", "correct_answers", "marks")
    ordering = ("order",)


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    """
    Administration interface for exams.

    The exam code is generated on creation and shown read-only.
    """

    list_display = ("title", "code", "subject", "creator", "duration", "created_at")
    list_filter = ("subject", "created_at")
    search_fields = ("title", "code", "subject", "creator__username")
    readonly_fields = ("code", "created_at")
    inlines = [QuestionInline]
    fieldsets = (
        (_("Basic Information"), {"fields": ("title", "subject", "code", "creator")}),
        (_("Content"), {"fields": ("description", "instructions", "attachment")}),
        (_("Configuration"), {"fields": ("duration", "created_at")}),
    )

    def save_model(self, request, obj, form, change):
        if not obj.code:
            from .services.store import entity_store

            obj.code = entity_store.generate_exam_code()
        super().save_model(request, obj, form, change)

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("creator")


# --- Submission Administration ---


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 0
    fields = ("question", "answer", "is_correct", "score", "needs_review", "review_comment")
    readonly_fields = ("question", "answer", "is_correct")
    can_delete = False


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "exam", "user", "start_time", "end_time", "score", "completed")
    list_filter = ("completed", "exam")
    search_fields = ("exam__title", "exam__code", "user__username")
    readonly_fields = ("start_time", "duration", "end_time", "score", "completed")
    inlines = [AnswerInline]

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("exam", "user")


@admin.register(ReviewRequest)
class ReviewRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "answer", "user", "status", "created_at", "resolved_at", "resolved_by")
    list_filter = ("status", "created_at")
    search_fields = ("reason", "user__username")
    readonly_fields = ("created_at", "resolved_at", "resolved_by")

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("answer", "user", "resolved_by")
