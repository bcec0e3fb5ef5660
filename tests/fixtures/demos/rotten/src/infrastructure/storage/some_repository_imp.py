from ...domain_services.some_repository import SomeRepository


class SomeRepositoryImplementation(SomeRepository):
    def get_some_data(self) -> dict:
        return {"some_property": "some value"}
