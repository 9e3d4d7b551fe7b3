import atexit

from django.apps import AppConfig


class CareersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'careers'
    verbose_name = 'SkillPath Careers'

    services = None

    def ready(self):
        # One Firebase handle per process, released at interpreter exit.
        from django.conf import settings
        from careers.firebase_utils import FirebaseClient
        from careers.services import CareerServices

        self.services = CareerServices.build(FirebaseClient.from_settings(settings))
        atexit.register(self.services.close)
