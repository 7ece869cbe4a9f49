from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from hoh.core.permissions import IsAdminRole
from .cache import get_cached_testimonials, get_cached_gallery
from .models import Testimonial, GalleryItem
from .serializers import TestimonialSerializer, GalleryItemSerializer


@api_view(['GET'])
@permission_classes([AllowAny])
def testimonial_list(request):
    """Public testimonials, newest first"""
    def build():
        testimonials = Testimonial.objects.order_by('-created_at')
        serializer = TestimonialSerializer(testimonials, many=True)
        return {'count': len(serializer.data), 'results': serializer.data}

    return Response(get_cached_testimonials(build))


@api_view(['GET'])
@permission_classes([AllowAny])
def gallery_list(request):
    """Public gallery, newest first, optionally narrowed by category"""
    category = request.query_params.get('category', '').strip() or None

    def build():
        items = GalleryItem.objects.order_by('-created_at')
        if category:
            items = items.filter(category__iexact=category)
        serializer = GalleryItemSerializer(items, many=True)
        return {'count': len(serializer.data), 'results': serializer.data}

    return Response(get_cached_gallery(category, build))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def testimonial_create(request):
    serializer = TestimonialSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def testimonial_detail(request, pk):
    testimonial = get_object_or_404(Testimonial, pk=pk)

    if request.method == 'GET':
        return Response(TestimonialSerializer(testimonial).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = TestimonialSerializer(testimonial, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        testimonial.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def gallery_item_create(request):
    serializer = GalleryItemSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def gallery_item_detail(request, pk):
    item = get_object_or_404(GalleryItem, pk=pk)

    if request.method == 'GET':
        return Response(GalleryItemSerializer(item).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = GalleryItemSerializer(item, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        item.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
