"""
Shared building blocks for the record endpoints.

Every entity in the system goes through the same lifecycle: field validation,
referenced-record checks, uniqueness checks, entity-specific rules, then a
single write. ``RecordSerializer`` runs those checks in that order and
``RecordViewSet`` exposes the create/list/detail/update/delete contract on
top of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from django.db import models
from rest_framework import serializers, status, viewsets
from rest_framework.response import Response
from rest_framework.validators import UniqueValidator

from .exceptions import BusinessRuleViolation, DuplicateValue, ReferenceNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reference:
    """A foreign key carried as a plain id attribute (``student_id`` etc.)."""

    attr: str
    model: type[models.Model]
    active_only: bool = False

    @property
    def label(self) -> str:
        return str(self.model._meta.verbose_name).capitalize()

    def check(self, value: Optional[int]) -> None:
        if value is None:
            return
        queryset = self.model._default_manager.filter(pk=value)
        if self.active_only:
            queryset = queryset.filter(is_active=True)
        if not queryset.exists():
            suffix = " or inactive" if self.active_only else ""
            logger.info(f"Rejected write: {self.label} {value} not found{suffix}")
            raise ReferenceNotFound(f"{self.label} with ID {value} not found{suffix}")


class RecordSerializer(serializers.ModelSerializer):
    """
    ModelSerializer that owns the referential rules of its entity.

    ``references``  -- Reference entries checked for existence.
    ``unique_fields`` -- field names, or tuples of names checked together.

    Storage-level unique validators are stripped so that collisions surface as
    ``DuplicateValue`` after the reference checks, not as field errors.
    """

    references: Sequence[Reference] = ()
    unique_fields: Sequence[Union[str, tuple[str, ...]]] = ()

    def build_standard_field(self, field_name, model_field):
        field_class, field_kwargs = super().build_standard_field(field_name, model_field)
        if "validators" in field_kwargs:
            field_kwargs["validators"] = [
                validator for validator in field_kwargs["validators"]
                if not isinstance(validator, UniqueValidator)
            ]
        return field_class, field_kwargs

    def get_validators(self):
        return []

    def validate(self, attrs):
        attrs = super().validate(attrs)
        self.check_references(attrs)
        self.check_uniqueness(attrs)
        self.check_rules(attrs)
        return attrs

    def current_value(self, attrs, attr):
        if attr in attrs:
            return attrs[attr]
        if self.instance is not None:
            return getattr(self.instance, attr)
        return None

    def check_references(self, attrs):
        for reference in self.references:
            if reference.attr in attrs:
                reference.check(attrs[reference.attr])

    def check_uniqueness(self, attrs):
        model = self.Meta.model
        for entry in self.unique_fields:
            attr_names = (entry,) if isinstance(entry, str) else tuple(entry)
            if not any(name in attrs for name in attr_names):
                continue
            lookup = {name: self.current_value(attrs, name) for name in attr_names}
            if any(value is None for value in lookup.values()):
                continue
            queryset = model._default_manager.filter(**lookup)
            if self.instance is not None:
                queryset = queryset.exclude(pk=self.instance.pk)
            if queryset.exists():
                described = ", ".join(f"{name}={value}" for name, value in lookup.items())
                logger.info(f"Rejected write: duplicate {model._meta.verbose_name} ({described})")
                raise DuplicateValue({"fields": list(attr_names), "value": described})

    def check_rules(self, attrs):
        """Entity-specific rules; runs after references and uniqueness."""


class RecordViewSet(viewsets.ModelViewSet):
    """
    CRUD endpoints for one record type.

    Lists are unpaginated and in id order. Detail lookups of an absent id
    answer 204 with no body. Updates are always partial.
    """

    pagination_class = None
    lookup_value_regex = r"\d+"
    ordering = ["id"]

    def get_queryset(self):
        return super().get_queryset().order_by(*self.ordering)

    def retrieve(self, request, *args, **kwargs):
        return self.optional_response(self.get_queryset().filter(pk=kwargs[self.lookup_field]).first())

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.check_destroy(instance)
        self.perform_destroy(instance)
        return Response({"success": True}, status=status.HTTP_200_OK)

    def check_destroy(self, instance):
        """Raise BusinessRuleViolation to keep ``instance``."""

    def optional_response(self, instance):
        if instance is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        self.check_object_permissions(self.request, instance)
        return Response(self.get_serializer(instance).data)

    def list_where(self, **lookups):
        queryset = self.get_queryset().filter(**lookups)
        return Response(self.get_serializer(queryset, many=True).data)

    def query_params(self, serializer_class):
        serializer = serializer_class(data=self.request.query_params.dict())
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


def reject(message: str) -> None:
    logger.info(f"Rejected by business rule: {message}")
    raise BusinessRuleViolation(message)


class StudentQuerySerializer(serializers.Serializer):
    student_id = serializers.IntegerField()


class DateRangeQuerySerializer(serializers.Serializer):
    """Inclusive bounds; a reversed range simply matches nothing."""

    start_date = serializers.DateField()
    end_date = serializers.DateField()


def choice_query_serializer(name: str, choices: Iterable[str]) -> type[serializers.Serializer]:
    return type(
        f"{name.title().replace('_', '')}QuerySerializer",
        (serializers.Serializer,),
        {name: serializers.ChoiceField(choices=list(choices))},
    )


def flag_query_serializer(name: str) -> type[serializers.Serializer]:
    return type(
        f"{name.title().replace('_', '')}QuerySerializer",
        (serializers.Serializer,),
        {name: serializers.BooleanField()},
    )
