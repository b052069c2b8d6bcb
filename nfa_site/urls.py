from django.urls import include, path

urlpatterns = [
    path('', include('lambda_nfa.urls')),
]
