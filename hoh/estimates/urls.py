from django.urls import path
from .views import (
    city_estimate_view, options_view, package_estimate_view,
    interior_estimate_view, construction_estimate_view,
    interior_wizard_view, construction_wizard_view,
)

urlpatterns = [
    path('estimate/', city_estimate_view, name='city-estimate'),
    path('estimates/options/', options_view, name='estimate-options'),
    path('estimates/package/', package_estimate_view, name='package-estimate'),
    path('estimates/interior/', interior_estimate_view, name='interior-estimate'),
    path('estimates/construction/', construction_estimate_view, name='construction-estimate'),
    path('estimates/interior/wizard/', interior_wizard_view, name='interior-wizard'),
    path('estimates/construction/wizard/', construction_wizard_view, name='construction-wizard'),
]
