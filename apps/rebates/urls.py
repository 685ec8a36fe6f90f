from django.urls import path
from . import views

app_name = 'rebates'

urlpatterns = [
    # POST /api/rebates/mappings/                                  - Upsert mappings (admin)
    path('mappings/', views.upsert_mappings, name='mapping-upsert'),
    # GET  /api/rebates/mappings/restaurant/{id}/                  - By restaurant (admin)
    path(
        'mappings/restaurant/<uuid:restaurant_id>/',
        views.restaurant_mappings,
        name='restaurant-mappings'
    ),
    # GET  /api/rebates/mappings/container-type/{id}/              - By container type (admin)
    path(
        'mappings/container-type/<uuid:container_type_id>/',
        views.container_type_mappings,
        name='container-type-mappings'
    ),
    # GET  /api/rebates/value/{container_type_id}/                 - Value at caller's restaurant
    path('value/<uuid:container_type_id>/', views.rebate_value, name='rebate-value'),
]
