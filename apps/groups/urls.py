from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # POST   /api/groups/                                  - Create group (caller becomes leader)
    # GET    /api/groups/{id}/                             - Get group details
    # PATCH  /api/groups/{id}/                             - Update group (leader/co-leader)
    # DELETE /api/groups/{id}/                             - Delete group (leader/co-leader)
    # GET    /api/groups/my/                               - Groups the user belongs to
    # GET    /api/groups/favorites/                        - Favorite groups

    # Membership actions
    # POST   /api/groups/{id}/join/                        - Join / request to join
    # POST   /api/groups/{id}/leave/                       - Leave group
    # GET    /api/groups/{id}/favorite/                    - Is group favorite
    # POST   /api/groups/{id}/favorite/                    - Toggle favorite
    # GET    /api/groups/{id}/members/                     - Members, or count only
    # GET    /api/groups/{id}/requests/                    - Pending requests (leader/co-leader)
    # POST   /api/groups/{id}/requests/{user_id}/accept/   - Accept request
    # POST   /api/groups/{id}/requests/{user_id}/reject/   - Reject request
    # DELETE /api/groups/{id}/members/{user_id}/           - Kick member
    # POST   /api/groups/{id}/members/{user_id}/role/      - Change role / transfer leadership

    path('', include(router.urls)),
]
