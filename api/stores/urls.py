from django.urls import path
from . import views

app_name = 'stores'

urlpatterns = [
    # Public contact page
    path('locations/', views.LocationListView.as_view(), name='location-list'),
    path('locations/<slug:location>/', views.LocationDetailView.as_view(), name='location-detail'),
    path('locations/<slug:location>/contact/', views.ContactSubmissionView.as_view(), name='location-contact'),

    # Admin back-office
    path('admin/', views.StoreLocationListView.as_view(), name='store-list'),
    path('admin/<slug:location>/', views.StoreSettingsView.as_view(), name='store-settings'),
    path('hours/edit/', views.HoursEditView.as_view(), name='hours-edit'),
]
