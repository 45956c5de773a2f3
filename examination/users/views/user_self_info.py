"""
Examination User Fetch Own Info

Author: DSP Development Team
Version: 1.0.0
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import UserSerializer


class CurrentUserView(APIView):
    def get(self, request):
        serializer = UserSerializer(request.user)
        return Response(serializer.data)
