class SprayCounts:
    """
    Structure and population counts of a spray record

    Used to check the counts of a new record, or the merged counts of an
    updated one, before they are written
    """

    def __init__(
        self,
        structures_found,
        structures_sprayed,
        structures_not_sprayed,
        number_of_persons,
        children_under_5,
        pregnant_women,
    ):
        self.structures_found = structures_found
        self.structures_sprayed = structures_sprayed
        self.structures_not_sprayed = structures_not_sprayed
        self.number_of_persons = number_of_persons
        self.children_under_5 = children_under_5
        self.pregnant_women = pregnant_women

    def get_errors(self):
        errors = []

        if self.structures_not_sprayed < 0:
            errors.append("Structures sprayed cannot exceed structures found")
        elif (
            self.structures_sprayed + self.structures_not_sprayed
            != self.structures_found
        ):
            errors.append(
                "Structures sprayed and not sprayed must add up to structures found"
            )

        if self.children_under_5 > self.number_of_persons:
            errors.append("Children under 5 cannot exceed the number of persons")

        if self.pregnant_women > self.number_of_persons:
            errors.append("Pregnant women cannot exceed the number of persons")

        return errors
