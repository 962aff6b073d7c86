"""
Example 02: Many-to-Many Through a Join Model

This example demonstrates BelongsToMany hydration, explicit join keys, and a
post-process hook that reads its ancestors.
"""

from pprint import pprint

from row_hydra import RegistryBuilder, SchemaNode


def main():
    registry = (
        RegistryBuilder()
        .model("Person", ["code", "name"])
        .model("PersonRelation", ["code", "firstPersonCode", "secondPersonCode", "type"])
        .belongs_to_many(
            "Person",
            "Person",
            "PersonRelation",
            name="RelatedPeople",
            through_alias="Relations",
            foreign_key="firstPersonCode",
            other_key="secondPersonCode",
        )
        .has_many("Person", "PersonRelation", "Relations", foreign_key="secondPersonCode")
        .build()
    )

    rows = [
        {
            "Person.code": "P1",
            "Person.name": "John",
            "RelatedPeople.code": "P2",
            "RelatedPeople.name": "Paul",
            "Relations.code": "P1_P2",
            "Relations.firstPersonCode": "P1",
            "Relations.secondPersonCode": "P2",
            "Relations.type": "friends",
        },
        {
            "Person.code": "P1",
            "Person.name": "John",
            "RelatedPeople.code": "P10",
            "RelatedPeople.name": "Yoko",
            "Relations.code": "P1_P10",
            "Relations.firstPersonCode": "P1",
            "Relations.secondPersonCode": "P10",
            "Relations.type": "couple",
        },
    ]

    def describe(relation, parents):
        # parents holds every ancestor by alias, including this node
        return {
            "type": relation["type"],
            "summary": f"{parents['Person']['name']} -> {parents['RelatedPeople']['name']}",
        }

    schema = SchemaNode(
        "Person",
        children=[
            SchemaNode(
                "Person",
                "RelatedPeople",
                children=[SchemaNode("PersonRelation", "Relations", post_process=describe)],
            )
        ],
    )

    print("=== Many-to-Many ===\n")
    pprint(registry.hydrate(rows, schema))


if __name__ == "__main__":
    main()
