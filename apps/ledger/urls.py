from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    # Caller's history
    path('activity/recent/', views.recent_activity, name='recent-activity'),
    path('rebates/mine/', views.my_rebates, name='my-rebates'),

    # Payout totals
    path('totals/staff/<uuid:staff_id>/', views.staff_rebate_totals, name='staff-totals'),
    path(
        'totals/restaurant/<uuid:restaurant_id>/',
        views.restaurant_rebate_totals,
        name='restaurant-totals'
    ),
]
