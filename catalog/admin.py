"""Admin registration for catalog models."""

from django.contrib import admin

from .models import Brand, Category, Product, Review


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("name", "logo_url", "created_at")
    search_fields = ("name",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "parent")
    search_fields = ("name",)


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    fields = ("user", "name", "rating", "comment")
    readonly_fields = ("user", "name")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "brand", "category", "price", "in_stock", "rating", "num_reviews")
    search_fields = ("name", "description", "brand__name")
    list_filter = ("brand", "category")
    readonly_fields = ("rating", "num_reviews")
    inlines = [ReviewInline]
