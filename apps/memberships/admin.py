"""Memberships Admin"""

from django.contrib import admin, messages

from .models import LevelMeta, Member, MemberNote, SubscriptionLevel
from .services import MemberCountService


class LevelMetaInline(admin.TabularInline):
    model = LevelMeta
    extra = 0
    readonly_fields = ('meta_key', 'meta_value')
    can_delete = False


@admin.register(SubscriptionLevel)
class SubscriptionLevelAdmin(admin.ModelAdmin):
    list_display = ('name', 'duration', 'duration_unit', 'price', 'active_members', 'is_active')
    list_filter = ('is_active', 'duration_unit')
    search_fields = ('name',)
    inlines = [LevelMetaInline]
    actions = ['recount_members']

    @admin.display(description='Active members')
    def active_members(self, obj):
        return obj.get_member_count(Member.STATUS_ACTIVE)

    @admin.action(description='Recount members for all levels')
    def recount_members(self, request, queryset):
        counts = MemberCountService.reconcile()
        self.message_user(request, f"Updated {len(counts)} member counters", messages.SUCCESS)


class MemberNoteInline(admin.TabularInline):
    model = MemberNote
    extra = 0
    readonly_fields = ('note', 'created_at')
    can_delete = False


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ('user', 'subscription_level', 'status', 'expiration', 'recurring', 'expiring_soon_email_sent_at')
    list_filter = ('status', 'recurring', 'subscription_level')
    search_fields = ('user__username', 'user__email')
    raw_id_fields = ('user',)
    readonly_fields = ('expiring_soon_email_sent_at', 'created_at', 'updated_at')
    inlines = [MemberNoteInline]

    def save_model(self, request, obj, form, change):
        # A new expiration starts a new period, so the reminder is re-armed
        if change and 'expiration' in form.changed_data:
            obj.expiring_soon_email_sent_at = None
        super().save_model(request, obj, form, change)


@admin.register(MemberNote)
class MemberNoteAdmin(admin.ModelAdmin):
    list_display = ('member', 'note', 'created_at')
    search_fields = ('member__user__username', 'note')
    readonly_fields = ('member', 'note', 'created_at')
