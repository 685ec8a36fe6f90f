from django.urls import path
from . import views

app_name = 'containers'

urlpatterns = [
    path('generate/', views.generate, name='container-generate'),
    path('register/', views.register, name='container-register'),
    path('rebate/', views.rebate, name='container-rebate'),
    path('return/', views.return_container, name='container-return'),
    path('lookup/', views.container_by_qr, name='container-lookup'),
    path('mine/', views.my_containers, name='my-containers'),
    path('mine/stats/', views.my_stats, name='my-stats'),
    path('<uuid:container_id>/status/', views.mark_status, name='container-status'),
    path('restaurant/<uuid:restaurant_id>/', views.restaurant_containers, name='restaurant-containers'),
    path('restaurant/<uuid:restaurant_id>/stats/', views.restaurant_stats, name='restaurant-stats'),
]
