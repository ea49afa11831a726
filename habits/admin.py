from django.contrib import admin
from .models import Habit, Completion
from .services.streak_engine import StreakEngine


class CompletionInline(admin.TabularInline):
    model = Completion
    extra = 0
    readonly_fields = ('created_at',)
    ordering = ('-completed_on',)


@admin.register(Habit)
class HabitAdmin(admin.ModelAdmin):
    list_display = ('name', 'frequency', 'target_count', 'current_streak', 'longest_streak', 'completion_rate', 'created_at')
    list_filter = ('frequency', 'created_at')
    search_fields = ('name', 'description')
    readonly_fields = ('created_at', 'updated_at', 'current_streak', 'longest_streak', 'completion_rate')
    date_hierarchy = 'created_at'
    inlines = [CompletionInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description')
        }),
        ('Target Settings', {
            'fields': ('frequency', 'target_count')
        }),
        ('Statistics', {
            'fields': ('current_streak', 'longest_streak', 'completion_rate'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def _progress(self, obj):
        # Cached per object so one changelist row computes its streaks once.
        if not hasattr(obj, '_progress_cache'):
            obj._progress_cache = StreakEngine().progress(obj)
        return obj._progress_cache

    def current_streak(self, obj):
        return self._progress(obj).current_streak
    current_streak.short_description = "Current streak"

    def longest_streak(self, obj):
        return self._progress(obj).longest_streak
    longest_streak.short_description = "Longest streak"

    def completion_rate(self, obj):
        return f"{self._progress(obj).completion_rate:.1f}%"
    completion_rate.short_description = "Completion rate"


@admin.register(Completion)
class CompletionAdmin(admin.ModelAdmin):
    list_display = ('habit', 'completed_on', 'created_at')
    list_filter = ('completed_on', 'habit')
    search_fields = ('habit__name',)
    raw_id_fields = ('habit',)
    date_hierarchy = 'completed_on'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('habit')
