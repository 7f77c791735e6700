from __future__ import annotations

from typing import Iterable, List, Optional

from docbundle.models import Catalog, DocumentCategory, FileDescriptor, ProductCategory, ResolvedFiles

TECH_SPECS_KEYWORDS = ("technical", "specifications")
INSTALLATION_KEYWORDS = ("installation",)
CERTIFICATION_KEYWORDS = ("certification", "conformity")

# Product categories whose data sheet bundle also carries installation guides
WITH_INSTALLATION = {
    ProductCategory.DC_CHARGING_STATION.value,
    ProductCategory.DC_FAST_CHARGING_STATION.value,
}


def find_category(catalog: Optional[Catalog], keywords: Iterable[str]) -> Optional[DocumentCategory]:
    """
    Return the first category whose name contains any of `keywords`
    (case-insensitive), or None.
    """
    if catalog is None:
        return None
    needles = [k.lower() for k in keywords]
    for category in catalog.categories:
        name = category.name.lower()
        if any(n in name for n in needles):
            return category
    return None


def _files(category: Optional[DocumentCategory]) -> List[FileDescriptor]:
    return list(category.files) if category is not None else []


def resolve(product_category: Optional[str], catalog: Optional[Catalog]) -> ResolvedFiles:
    """
    Pick the data sheet and conformity files for a product category.

    Never raises; missing categories contribute an empty list.
    """
    tech_specs = find_category(catalog, TECH_SPECS_KEYWORDS)
    installation = find_category(catalog, INSTALLATION_KEYWORDS)
    certification = find_category(catalog, CERTIFICATION_KEYWORDS)

    tag = product_category.value if isinstance(product_category, ProductCategory) else product_category

    data_sheet_files = _files(tech_specs)
    if tag in WITH_INSTALLATION:
        data_sheet_files = data_sheet_files + _files(installation)

    return ResolvedFiles(
        data_sheet_files=data_sheet_files,
        conformity_files=_files(certification),
    )
