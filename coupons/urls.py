from django.urls import path
from . import views

urlpatterns = [
    path('coupon', views.coupon_collection, name='coupon_collection'),
    path('coupon/<str:coupon_id>', views.coupon_detail, name='coupon_detail'),
]
