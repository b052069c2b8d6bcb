from django.urls import path
from . import views

urlpatterns = [
    # Membership and prefix queries
    path('api/check-word/', views.check_word, name='check_word'),
    path('api/longest-prefix/', views.longest_prefix, name='longest_prefix'),

    # Inspection
    path('api/display/', views.display, name='display'),
    path('api/validate-transition/', views.validate_transition, name='validate_transition'),
    path('api/epsilon-closures/', views.epsilon_closures, name='epsilon_closures'),

    # Sample automaton and alphabet
    path('api/fixture/', views.fixture, name='fixture'),
    path('api/alphabet/', views.alphabet, name='alphabet'),
]
