"""Admin serializers for write endpoints in the catalog app."""

from rest_framework import serializers

from .models import Brand, Category, Product


class BrandAdminSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["id", "name", "logo_url", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]


class CategoryAdminSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "parent", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_parent(self, value):
        if value is not None and self.instance is not None and value.pk == self.instance.pk:
            raise serializers.ValidationError("A category cannot be its own parent.")
        return value


class ProductAdminSerializer(serializers.ModelSerializer):
    brand = serializers.PrimaryKeyRelatedField(queryset=Brand.objects.all())
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), allow_null=True, required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "brand",
            "category",
            "price",
            "description",
            "image_url",
            "specs",
            "in_stock",
            "rating",
            "num_reviews",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["rating", "num_reviews", "created_at", "updated_at"]

    def validate_specs(self, value):
        if value in (None, ""):
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Specs must be an object.")
        return value


class UploadSerializer(serializers.Serializer):
    filename = serializers.CharField(max_length=255)
    content_type = serializers.CharField(max_length=100, required=False, default="image/jpeg")
    data = serializers.CharField()


class UploadDeleteSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=500)
