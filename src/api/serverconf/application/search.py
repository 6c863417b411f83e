"""Composable search predicates for service client candidates.

Each stage is a pure function over a ServiceClient. A stage whose search
term is empty matches everything, and a candidate is kept only when every
stage agrees. Stages dispatch on the identity's object type tag.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from serverconf.application.value_objects import ServiceClient, ServiceClientSearch
from serverconf.domain.value_objects import XRoadObjectType

SearchPredicate = Callable[[ServiceClient], bool]


def _contains(value: str | None, term: str) -> bool:
    return value is not None and term.lower() in value.lower()


def match_all(candidate: ServiceClient) -> bool:
    return True


def is_not_member(candidate: ServiceClient) -> bool:
    """Members never hold access rights themselves, only their subsystems do."""
    return candidate.subject_id.object_type != XRoadObjectType.MEMBER


def subject_type_is(subject_type: XRoadObjectType | None) -> SearchPredicate:
    if subject_type is None:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        return candidate.subject_id.object_type == subject_type

    return predicate


def name_or_description_contains(term: str | None) -> SearchPredicate:
    """Match member names of clients and descriptions of local groups."""
    if not term:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        match candidate.subject_id.object_type:
            case XRoadObjectType.MEMBER | XRoadObjectType.SUBSYSTEM:
                return _contains(candidate.member_name, term)
            case XRoadObjectType.LOCALGROUP:
                return _contains(candidate.local_group_description, term)
            case _:
                return False

    return predicate


def instance_contains(term: str | None) -> SearchPredicate:
    """Match the X-Road instance. Local groups have none and always pass."""
    if not term:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        subject = candidate.subject_id
        match subject.object_type:
            case XRoadObjectType.LOCALGROUP:
                return True
            case _:
                return _contains(subject.xroad_instance, term)

    return predicate


def member_class_contains(term: str | None) -> SearchPredicate:
    if not term:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        subject = candidate.subject_id
        match subject.object_type:
            case XRoadObjectType.MEMBER | XRoadObjectType.SUBSYSTEM:
                return _contains(subject.member_class, term)
            case _:
                return False

    return predicate


def subsystem_code_contains(term: str | None) -> SearchPredicate:
    if not term:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        subject = candidate.subject_id
        match subject.object_type:
            case XRoadObjectType.SUBSYSTEM:
                return _contains(subject.subsystem_code, term)
            case _:
                return False

    return predicate


def member_group_code_contains(term: str | None) -> SearchPredicate:
    """Match the member code of clients or the group code of groups."""
    if not term:
        return match_all

    def predicate(candidate: ServiceClient) -> bool:
        subject = candidate.subject_id
        match subject.object_type:
            case XRoadObjectType.MEMBER | XRoadObjectType.SUBSYSTEM:
                return _contains(subject.member_code, term)
            case XRoadObjectType.GLOBALGROUP | XRoadObjectType.LOCALGROUP:
                return _contains(subject.group_code, term)
            case _:
                return False

    return predicate


def build_search_predicates(search: ServiceClientSearch) -> list[SearchPredicate]:
    """Build the ordered predicate chain for a set of search terms."""
    return [
        is_not_member,
        subject_type_is(search.subject_type),
        name_or_description_contains(search.name_or_description),
        instance_contains(search.instance),
        member_class_contains(search.member_class),
        subsystem_code_contains(search.subsystem_code),
        member_group_code_contains(search.member_group_code),
    ]


def matches_all(
    predicates: Sequence[SearchPredicate], candidate: ServiceClient
) -> bool:
    return all(predicate(candidate) for predicate in predicates)


def filter_service_clients(
    candidates: Iterable[ServiceClient], search: ServiceClientSearch
) -> list[ServiceClient]:
    """Keep the candidates matching every search term, preserving order."""
    predicates = build_search_predicates(search)
    return [c for c in candidates if matches_all(predicates, c)]
