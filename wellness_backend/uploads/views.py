"""Admin upload endpoints backed by ``storage``."""

import logging

from django.conf import settings
from django.http import Http404

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from wellness_backend.core.exceptions import UploadRejected
from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.utils import parse_int

from . import storage

logger = logging.getLogger(__name__)


def _target_directory(request):
    directory = (request.data.get('directory') or '').strip() or None
    if directory is not None and directory not in storage.UPLOAD_DIRECTORIES:
        raise UploadRejected(f'Invalid upload directory: {directory}', field='directory')
    return directory


class UploadSingleView(APIView):
    """POST /api/uploads/single/ (multipart ``file``, optional ``directory``)"""

    permission_classes = [IsClinicAdmin]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, *args, **kwargs):
        upload = request.FILES.get('file')
        if upload is None:
            return Response({'error': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)
        directory = _target_directory(request)
        storage.validate_upload(upload)
        stored = storage.save_upload(upload, directory)
        return Response(
            {'message': 'File uploaded successfully', 'file': stored.to_dict()},
            status=status.HTTP_201_CREATED,
        )


class UploadMultipleView(APIView):
    """POST /api/uploads/multiple/ (multipart ``files``, at most UPLOAD_MAX_FILES)"""

    permission_classes = [IsClinicAdmin]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, *args, **kwargs):
        uploads = request.FILES.getlist('files')
        if not uploads:
            return Response({'error': 'No files uploaded'}, status=status.HTTP_400_BAD_REQUEST)
        max_files = settings.UPLOAD_MAX_FILES
        if len(uploads) > max_files:
            return Response(
                {'error': f'Too many files. Maximum is {max_files} files.'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        directory = _target_directory(request)
        for upload in uploads:
            storage.validate_upload(upload, field='files')

        stored = []
        try:
            for upload in uploads:
                stored.append(storage.save_upload(upload, directory))
        except Exception:
            for item in stored:
                storage.delete_upload(item.path)
            raise

        return Response(
            {
                'message': f'{len(stored)} files uploaded successfully',
                'files': [item.to_dict() for item in stored],
            },
            status=status.HTTP_201_CREATED,
        )


class UploadDeleteView(APIView):
    """DELETE /api/uploads/<filename>/ - searches every upload directory."""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'File not found'

    def delete(self, request, filename, *args, **kwargs):
        found = storage.find_upload(filename)
        if found is None:
            raise Http404
        directory, path = found
        storage.delete_upload(storage.public_path(directory, path.name))
        logger.info('Upload %s/%s deleted by user_id=%s', directory, path.name, request.user.pk)
        return Response({'message': 'File deleted successfully'})


class UploadListView(APIView):
    """GET /api/uploads/list/[<directory>/]?page=&limit="""

    permission_classes = [IsClinicAdmin]

    def get(self, request, directory=None, *args, **kwargs):
        if directory is not None and directory not in storage.UPLOAD_DIRECTORIES:
            return Response({'error': 'Invalid directory'}, status=status.HTTP_400_BAD_REQUEST)

        directories = [directory] if directory else list(storage.UPLOAD_DIRECTORIES)
        files = []
        for name in directories:
            files.extend(storage.list_directory(name))
        files.sort(key=lambda item: item['modified'], reverse=True)

        page = parse_int(request.query_params.get('page'), 1, minimum=1)
        limit = parse_int(request.query_params.get('limit'), 20, minimum=1, maximum=100)
        start = (page - 1) * limit
        total = len(files)
        return Response({
            'files': files[start:start + limit],
            'pagination': {
                'page': page,
                'limit': limit,
                'total': total,
                'pages': (total + limit - 1) // limit,
            },
        })


class UploadInfoView(APIView):
    """GET /api/uploads/info/<filename>/"""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'File not found'

    def get(self, request, filename, *args, **kwargs):
        found = storage.find_upload(filename)
        if found is None:
            raise Http404
        directory, path = found
        return Response(storage.describe(directory, path))
