"""HTTP side of the booking wizard.

``HttpBookingClient`` loads the public catalog the wizard picks from and acts
as the wizard's submit transport (multipart POST to /api/appointments/).
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .wizard import BookingPayload, SubmitOutcome, WizardCatalog

logger = logging.getLogger(__name__)


class HttpBookingClient:
	def __init__(self, base_url: str, *, session: Optional[requests.Session] = None, timeout: float = 15):
		self.base_url = base_url.rstrip('/')
		self.session = session or requests.Session()
		self.timeout = timeout

	def _url(self, path: str) -> str:
		return f'{self.base_url}/api/{path.lstrip("/")}'

	def _get_list(self, path: str) -> list:
		response = self.session.get(self._url(path), timeout=self.timeout)
		response.raise_for_status()
		data = response.json()
		if isinstance(data, dict):
			data = data.get('results', [])
		return data

	def load_catalog(self) -> WizardCatalog:
		"""Fetch active services, practitioners and programs.

		Network and HTTP errors propagate as ``requests.RequestException``.
		"""
		return WizardCatalog.from_payload(
			services=self._get_list('services/'),
			practitioners=self._get_list('practitioners/'),
			programs=self._get_list('programs/'),
		)

	def __call__(self, payload: BookingPayload) -> SubmitOutcome:
		try:
			response = self.session.post(
				self._url('appointments/'),
				data=payload.fields,
				files=payload.files or None,
				timeout=self.timeout,
			)
		except requests.RequestException as exc:
			logger.warning('Booking request failed: %s', exc)
			return SubmitOutcome(ok=False)

		try:
			body = response.json()
		except ValueError:
			body = None

		if response.ok:
			return SubmitOutcome(ok=True, status_code=response.status_code, data=body)

		message = body.get('error') if isinstance(body, dict) else None
		return SubmitOutcome(ok=False, status_code=response.status_code, message=message)
