from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'meetups'

router = DefaultRouter()
router.register(r'', views.MeetupViewSet, basename='meetup')

urlpatterns = [
    # POST   /api/meetups/                       - Create meetup (caller hosts)
    # GET    /api/meetups/{id}/                  - Get meetup details
    # PATCH  /api/meetups/{id}/                  - Update meetup (host only)
    # DELETE /api/meetups/{id}/                  - Delete meetup (host only)
    # GET    /api/meetups/hosted/                - Meetups hosted by the user
    # GET    /api/meetups/group/{group_id}/      - Meetups of a group (?status=)

    # Participation
    # POST   /api/meetups/{id}/join/             - Join meetup
    # POST   /api/meetups/{id}/leave/            - Leave meetup
    # GET    /api/meetups/{id}/participants/     - Participants

    path('', include(router.urls)),
]
