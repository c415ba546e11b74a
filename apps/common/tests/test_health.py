import pytest
from django.conf import settings
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestHealthCheck:
    """Tests for the health endpoint under the default test settings."""

    def test_plain_http_is_served(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': 'ok'}

    def test_no_ssl_redirect_in_tests(self):
        assert settings.SECURE_SSL_REDIRECT is False
