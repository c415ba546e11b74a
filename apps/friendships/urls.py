from django.urls import path
from . import views

app_name = 'friendships'

urlpatterns = [
    # GET    /api/friendships/friends/               - Accepted friendships
    # GET    /api/friendships/pending/               - Pending requests
    # POST   /api/friendships/add/                   - Send friend request
    # PATCH  /api/friendships/{id}/status/           - Accept / reject
    # GET    /api/friendships/with/{user_id}/        - Friendship with a user
    # DELETE /api/friendships/with/{user_id}/        - Remove friendship
    path('friends/', views.friends, name='friends'),
    path('pending/', views.pending_requests, name='pending'),
    path('add/', views.send_request, name='send-request'),
    path('<uuid:friendship_id>/status/', views.update_status, name='update-status'),
    path('with/<uuid:user_id>/', views.friendship_with, name='friendship-with'),
]
