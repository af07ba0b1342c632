"""Catalog views: services, practitioners, programs and testimonials.

Public GET endpoints feed the marketing site and the booking wizard; the
``admin/`` endpoints are gated by ``IsClinicAdmin``.
"""

import logging

from django.db.models import Avg, Count, Q
from django.http import Http404

from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.utils import parse_bool, parse_int
from wellness_backend.uploads import storage

from .models import Practitioner, Program, Service, Testimonial
from .serializers import (
    PractitionerSerializer,
    PractitionerWriteSerializer,
    ProgramDetailSerializer,
    ProgramSerializer,
    ProgramWriteSerializer,
    ServiceDetailSerializer,
    ServiceSerializer,
    ServiceWriteSerializer,
    TestimonialSerializer,
    TestimonialWriteSerializer,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Shared bases
# -----------------------------------------------------------------------------


class IdentifierLookupMixin:
    """Resolve ``<identifier>`` as a numeric id or, failing that, a slug."""

    def get_object(self):
        identifier = str(self.kwargs['identifier'])
        qs = self.get_queryset()
        lookup = {'pk': int(identifier)} if identifier.isdigit() else {'slug': identifier}
        obj = qs.filter(**lookup).first()
        if obj is None:
            raise Http404
        self.check_object_permissions(self.request, obj)
        return obj


class AdminWriteMixin:
    """Write serializer in, read serializer out."""

    permission_classes = [IsClinicAdmin]
    read_serializer_class = None
    write_serializer_class = None
    image_field = None
    entity_label = 'record'

    def get_serializer_class(self):
        if self.request.method in ('POST', 'PUT', 'PATCH'):
            return self.write_serializer_class
        return self.read_serializer_class

    def _read(self, instance):
        return self.read_serializer_class(instance, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info('%s %s created by user_id=%s', self.entity_label, instance.pk, request.user.pk)
        return Response(self._read(instance), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # PUT behaves like PATCH: admin forms send only the edited fields.
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info('%s %s updated by user_id=%s', self.entity_label, instance.pk, request.user.pk)
        return Response(self._read(instance))

    def perform_destroy(self, instance):
        image_path = getattr(instance, self.image_field, '') if self.image_field else ''
        pk = instance.pk
        instance.delete()
        if image_path:
            storage.delete_upload(image_path)
        logger.info('%s %s deleted by user_id=%s', self.entity_label, pk, self.request.user.pk)


class ToggleView(generics.GenericAPIView):
    """PUT flips ``field`` between the two values in ``values``."""

    permission_classes = [IsClinicAdmin]
    field = 'status'
    values = ()

    def put(self, request, *args, **kwargs):
        instance = self.get_object()
        first, second = self.values
        current = getattr(instance, self.field)
        setattr(instance, self.field, second if current == first else first)
        instance.save(update_fields=[self.field, 'updated_at'])
        return Response(self.get_serializer(instance).data)

    patch = put


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def _service_queryset():
    return Service.objects.using('default').prefetch_related('practitioners', 'programs')


class ServiceListView(generics.ListAPIView):
    """GET /api/services/?featured=&category=&status="""

    permission_classes = [AllowAny]
    serializer_class = ServiceSerializer

    def get_queryset(self):
        params = self.request.query_params
        qs = _service_queryset().filter(status=params.get('status') or Service.STATUS_ACTIVE)
        featured = parse_bool(params.get('featured'))
        if featured is not None:
            qs = qs.filter(featured=featured)
        category = params.get('category')
        if category:
            qs = qs.filter(category=category.upper())
        return qs


class ServiceDetailView(IdentifierLookupMixin, generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = ServiceDetailSerializer
    not_found_message = 'Service not found'

    def get_queryset(self):
        return _service_queryset()


class ServiceAdminListCreateView(AdminWriteMixin, generics.ListCreateAPIView):
    read_serializer_class = ServiceSerializer
    write_serializer_class = ServiceWriteSerializer
    entity_label = 'Service'

    def get_queryset(self):
        return _service_queryset()


class ServiceAdminDetailView(AdminWriteMixin, generics.RetrieveUpdateDestroyAPIView):
    read_serializer_class = ServiceDetailSerializer
    write_serializer_class = ServiceWriteSerializer
    image_field = 'image'
    entity_label = 'Service'
    not_found_message = 'Service not found'

    def get_queryset(self):
        return _service_queryset()


class ServiceToggleStatusView(ToggleView):
    serializer_class = ServiceSerializer
    values = (Service.STATUS_ACTIVE, Service.STATUS_INACTIVE)
    not_found_message = 'Service not found'

    def get_queryset(self):
        return _service_queryset()


# -----------------------------------------------------------------------------
# Practitioners
# -----------------------------------------------------------------------------


def _practitioner_queryset():
    return Practitioner.objects.using('default').prefetch_related('services')


class PractitionerListView(generics.ListAPIView):
    """GET /api/practitioners/?service_id= (active only)"""

    permission_classes = [AllowAny]
    serializer_class = PractitionerSerializer

    def get_queryset(self):
        qs = _practitioner_queryset().filter(status=Practitioner.STATUS_ACTIVE)
        service_id = parse_int(self.request.query_params.get('service_id'))
        if service_id is not None:
            qs = qs.filter(services__id=service_id).distinct()
        return qs


class PractitionerDetailView(IdentifierLookupMixin, generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = PractitionerSerializer
    not_found_message = 'Practitioner not found'

    def get_queryset(self):
        return _practitioner_queryset().filter(status=Practitioner.STATUS_ACTIVE)


class PractitionerAdminListCreateView(AdminWriteMixin, generics.ListCreateAPIView):
    """GET /api/practitioners/admin/?status=&search=  POST creates."""

    read_serializer_class = PractitionerSerializer
    write_serializer_class = PractitionerWriteSerializer
    entity_label = 'Practitioner'

    def get_queryset(self):
        params = self.request.query_params
        qs = _practitioner_queryset()
        if params.get('status'):
            qs = qs.filter(status=params['status'].upper())
        search = (params.get('search') or '').strip()
        if search:
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(specialization__icontains=search)
            )
        return qs


class PractitionerAdminDetailView(AdminWriteMixin, generics.RetrieveUpdateDestroyAPIView):
    read_serializer_class = PractitionerSerializer
    write_serializer_class = PractitionerWriteSerializer
    image_field = 'photo'
    entity_label = 'Practitioner'
    not_found_message = 'Practitioner not found'

    def get_queryset(self):
        return _practitioner_queryset()


class PractitionerToggleStatusView(ToggleView):
    serializer_class = PractitionerSerializer
    values = (Practitioner.STATUS_ACTIVE, Practitioner.STATUS_BLOCKED)
    not_found_message = 'Practitioner not found'

    def get_queryset(self):
        return _practitioner_queryset()


# -----------------------------------------------------------------------------
# Programs
# -----------------------------------------------------------------------------


def _program_queryset():
    return (
        Program.objects.using('default')
        .select_related('service')
        .annotate(enrollment_count=Count('appointments', distinct=True))
    )


class ProgramListView(generics.ListAPIView):
    """GET /api/programs/?featured=&type=&status=&service_id="""

    permission_classes = [AllowAny]
    serializer_class = ProgramSerializer

    def get_queryset(self):
        params = self.request.query_params
        qs = _program_queryset().filter(status=params.get('status') or Program.STATUS_ACTIVE)
        featured = parse_bool(params.get('featured'))
        if featured is not None:
            qs = qs.filter(featured=featured)
        if params.get('type'):
            qs = qs.filter(type=params['type'].upper())
        service_id = parse_int(params.get('service_id'))
        if service_id is not None:
            qs = qs.filter(service_id=service_id)
        return qs


class ProgramDetailView(IdentifierLookupMixin, generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = ProgramDetailSerializer
    not_found_message = 'Program not found'

    def get_queryset(self):
        return _program_queryset()


class ProgramAdminListCreateView(AdminWriteMixin, generics.ListCreateAPIView):
    read_serializer_class = ProgramSerializer
    write_serializer_class = ProgramWriteSerializer
    entity_label = 'Program'

    def get_queryset(self):
        return _program_queryset()


class ProgramAdminDetailView(AdminWriteMixin, generics.RetrieveUpdateDestroyAPIView):
    read_serializer_class = ProgramDetailSerializer
    write_serializer_class = ProgramWriteSerializer
    image_field = 'image'
    entity_label = 'Program'
    not_found_message = 'Program not found'

    def get_queryset(self):
        return _program_queryset()

    def destroy(self, request, *args, **kwargs):
        program = self.get_object()
        if program.appointments.exists():
            return Response(
                {'error': 'Cannot delete program with existing appointments'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        self.perform_destroy(program)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProgramToggleStatusView(ToggleView):
    serializer_class = ProgramSerializer
    values = (Program.STATUS_ACTIVE, Program.STATUS_INACTIVE)
    not_found_message = 'Program not found'

    def get_queryset(self):
        return _program_queryset()


# -----------------------------------------------------------------------------
# Testimonials
# -----------------------------------------------------------------------------


def _testimonial_queryset():
    return Testimonial.objects.using('default').select_related('service', 'program')


class TestimonialListView(generics.GenericAPIView):
    """GET /api/testimonials/?featured=&status=&service_id=&rating=&limit=&offset="""

    permission_classes = [AllowAny]
    serializer_class = TestimonialSerializer

    def get(self, request, *args, **kwargs):
        params = request.query_params
        qs = _testimonial_queryset().filter(status=params.get('status') or Testimonial.STATUS_ACTIVE)
        featured = parse_bool(params.get('featured'))
        if featured is not None:
            qs = qs.filter(featured=featured)
        service_id = parse_int(params.get('service_id'))
        if service_id is not None:
            qs = qs.filter(service_id=service_id)
        min_rating = parse_int(params.get('rating'), minimum=1, maximum=5)
        if min_rating is not None:
            qs = qs.filter(rating__gte=min_rating)

        limit = parse_int(params.get('limit'), 20, minimum=1, maximum=100)
        offset = parse_int(params.get('offset'), 0, minimum=0)
        total = qs.count()
        page = list(qs[offset:offset + limit])
        return Response({
            'testimonials': self.get_serializer(page, many=True).data,
            'total_count': total,
            'has_more': offset + limit < total,
        })


class TestimonialStatsView(generics.GenericAPIView):
    """GET /api/testimonials/stats/ - active testimonials only."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        qs = Testimonial.objects.using('default').filter(status=Testimonial.STATUS_ACTIVE)
        average = qs.aggregate(avg=Avg('rating'))['avg']
        distribution = {str(rating): 0 for rating in range(1, 6)}
        for row in qs.values('rating').annotate(count=Count('id')).order_by():
            distribution[str(row['rating'])] = row['count']
        return Response({
            'total_testimonials': qs.count(),
            'featured_testimonials': qs.filter(featured=True).count(),
            'average_rating': round(float(average), 1) if average is not None else 0,
            'rating_distribution': distribution,
        })


class TestimonialAdminListCreateView(AdminWriteMixin, generics.ListCreateAPIView):
    """GET /api/testimonials/admin/?status=&featured=&search=  POST creates."""

    read_serializer_class = TestimonialSerializer
    write_serializer_class = TestimonialWriteSerializer
    entity_label = 'Testimonial'

    def get_queryset(self):
        params = self.request.query_params
        qs = _testimonial_queryset()
        if params.get('status'):
            qs = qs.filter(status=params['status'].upper())
        featured = parse_bool(params.get('featured'))
        if featured is not None:
            qs = qs.filter(featured=featured)
        search = (params.get('search') or '').strip()
        if search:
            qs = qs.filter(
                Q(patient_name__icontains=search)
                | Q(content__icontains=search)
                | Q(location__icontains=search)
            )
        return qs


class TestimonialAdminDetailView(AdminWriteMixin, generics.RetrieveUpdateDestroyAPIView):
    read_serializer_class = TestimonialSerializer
    write_serializer_class = TestimonialWriteSerializer
    image_field = 'photo'
    entity_label = 'Testimonial'
    not_found_message = 'Testimonial not found'

    def get_queryset(self):
        return _testimonial_queryset()


class TestimonialToggleStatusView(ToggleView):
    serializer_class = TestimonialSerializer
    values = (Testimonial.STATUS_ACTIVE, Testimonial.STATUS_INACTIVE)
    not_found_message = 'Testimonial not found'

    def get_queryset(self):
        return _testimonial_queryset()


class TestimonialToggleFeaturedView(ToggleView):
    serializer_class = TestimonialSerializer
    field = 'featured'
    values = (True, False)
    not_found_message = 'Testimonial not found'

    def get_queryset(self):
        return _testimonial_queryset()
