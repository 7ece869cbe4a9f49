import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .calculators import (
    city_estimate, package_estimate, interior_estimate, construction_estimate, estimate_options,
)
from .serializers import (
    PackageEstimateSerializer, InteriorEstimateSerializer, ConstructionEstimateSerializer,
    WizardRequestSerializer,
)
from .utils import save_estimate_lead
from .wizards import InteriorWizard, ConstructionWizard

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def city_estimate_view(request):
    """Quick estimate from carpet area and city"""
    estimate = city_estimate(request.data.get('carpet_area'), request.data.get('city'))
    return Response(estimate)


@api_view(['GET'])
@permission_classes([AllowAny])
def options_view(request):
    """Pricing tables and choices for the calculator forms"""
    return Response(estimate_options())


@api_view(['POST'])
@permission_classes([AllowAny])
def package_estimate_view(request):
    """Price a BHK x package combination and record the visitor as a lead"""
    serializer = PackageEstimateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    estimate = package_estimate(data['bhk'], data['package'])
    lead = save_estimate_lead(
        name=data['name'],
        email=data['email'],
        phone=data['phone'],
        bhk=data['bhk'],
        package=data['package'],
        estimated_cost=estimate['price'],
        source='Cost Estimate Form',
        service_type='interior',
    )
    return Response({'estimate': estimate, 'lead_id': lead.id}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def interior_estimate_view(request):
    serializer = InteriorEstimateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(interior_estimate(**serializer.validated_data))


@api_view(['POST'])
@permission_classes([AllowAny])
def construction_estimate_view(request):
    serializer = ConstructionEstimateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(construction_estimate(**serializer.validated_data))


def _run_wizard(request, wizard_class):
    serializer = WizardRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    params = serializer.validated_data
    wizard = wizard_class(params['data'])
    result = wizard.handle(
        params['step'],
        params['action'],
        space=params.get('space'),
        remove=params['remove'],
    )

    if result['errors']:
        return Response(result, status=status.HTTP_400_BAD_REQUEST)
    if result['completed']:
        logger.info(f"{wizard.name.capitalize()} calculator completed, lead {result['lead_id']}")
        return Response(result, status=status.HTTP_201_CREATED)
    return Response(result)


@api_view(['POST'])
@permission_classes([AllowAny])
def interior_wizard_view(request):
    return _run_wizard(request, InteriorWizard)


@api_view(['POST'])
@permission_classes([AllowAny])
def construction_wizard_view(request):
    return _run_wizard(request, ConstructionWizard)
