from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # GET /api/catalog/container-types/  - Active container types
    path('container-types/', views.container_type_list, name='container-type-list'),
    # GET /api/catalog/restaurants/      - Active restaurants
    path('restaurants/', views.restaurant_list, name='restaurant-list'),
]
