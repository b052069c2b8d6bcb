from django.apps import AppConfig


class LambdaNfaConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'lambda_nfa'
    verbose_name = 'Lambda NFA simulator'
