from django.contrib import admin
from django.urls import include, path

from habits.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health', health_check, name='health'),
    path('api/', include('habits.urls')),
]
