"""Fixed option lists shared by sign-up, request creation and the options endpoint."""

SERVICES = (
    "IT",
    "RH",
    "Infirmerie",
    "Médecin",
    "Accueil et facturation",
    "Direction",
    "Laboratoire",
    "Comptabilité",
    "Cotation",
    "Stock",
    "Trésorerie et caisse",
)

# Suggestions only: category is stored as free text.
INCIDENT_CATEGORIES = (
    "Problème d'imprimante",
    "Demande liée à Santymed",
    "Problème de réseau",
    "Demande liée à Q-Gabon",
    "Problème de fiches de paillasses",
    "Problème au niveau des automates",
    "Problème Pack Office",
    "Problème Call Center",
    "Demande de maintenance d'ordinateur",
    "Problème lié au téléphone de service",
    "Demande de création de compte Gmail",
    "Autre demande",
)

ORDER_CATEGORIES = (
    "Commander un ordinateur",
    "Commander un clavier",
    "Commander une souris",
    "Commander un cable USB pour imprimante",
    "Commander une imprimante",
    "Autre commande",
)
