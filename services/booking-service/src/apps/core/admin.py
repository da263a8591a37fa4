from django.contrib import admin
from .models import Booking, Feedback, Notification, Payment, Service, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['id', 'email', 'name', 'role', 'is_deleted', 'created_at']
    list_filter = ['role', 'is_deleted']
    search_fields = ['email', 'name']
    exclude = ['password']


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'service_type', 'is_deleted']
    search_fields = ['name']


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'service', 'status', 'price', 'admin', 'is_deleted', 'created_at']
    list_filter = ['status', 'is_deleted']


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'booking', 'amount', 'status', 'reference', 'paid_at']
    list_filter = ['status']
    search_fields = ['reference']


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'rating', 'created_at']


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'type', 'title', 'is_read', 'created_at']
    list_filter = ['type', 'is_read']
