from django.contrib import admin

from .models import Order, OrderItem
from .services import status_of


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "name", "price", "quantity", "image")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "total_price", "status", "is_paid", "is_delivered", "is_cancelled", "created_at")
    list_filter = ("is_paid", "is_delivered", "is_cancelled", "payment_method")
    search_fields = ("=id", "user__email", "user__name")
    readonly_fields = ("items_price", "tax_price", "shipping_price", "total_price", "created_at", "updated_at")
    raw_id_fields = ("user",)
    list_select_related = ("user",)
    inlines = [OrderItemInline]

    @admin.display(description="Status")
    def status(self, obj):
        return status_of(obj).label
